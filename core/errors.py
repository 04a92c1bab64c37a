"""
Exceptions raised by the document, rendering and signing collaborators.

Field geometry and pointer interaction never raise; they degrade to no-ops.
"""
from typing import Optional


class SignetError(Exception):
    """Base class for application errors."""


class ServiceError(SignetError):
    """The remote signing service could not complete a request."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class UploadError(ServiceError):
    pass


class SignError(ServiceError):
    pass


class DocumentFetchError(ServiceError):
    pass


class RenderError(SignetError):
    """A document could not be opened or a page could not be rendered."""


class SignPreconditionError(SignetError):
    """A sign request is missing a document, a signature image or a signature field."""


class OperationInProgressError(SignetError):
    """A request of the same kind is already in flight."""
