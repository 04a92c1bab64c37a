"""
The document being prepared for signing.
"""
import logging
import os
from typing import Optional

from core.errors import SignPreconditionError
from core.fields import FieldStore, FieldType
from core.signing.models import DocumentHandle, SignRequest
from core.signing.serialization import file_to_data_url, serialize_fields
from .view_state import ViewState

logger = logging.getLogger(__name__)

SIGNATURE_FORMATS = ("png", "jpg", "jpeg")


class DocumentSession:
    """Holds the uploaded document and signature image and builds sign requests."""

    def __init__(self, store: FieldStore, view_state: ViewState,
                 signature_formats=SIGNATURE_FORMATS):
        self.store = store
        self.view_state = view_state
        self.signature_formats = tuple(fmt.lower() for fmt in signature_formats)
        self.document: Optional[DocumentHandle] = None
        self.signature_image_path: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self.document is not None

    def replace_document(self, handle: DocumentHandle) -> None:
        """
        Switch to a newly uploaded document.

        All fields belong to the previous document and are dropped; the
        viewer goes back to page 1.
        """
        self.document = handle
        self.store.clear()
        self.view_state.reset_for_new_document()
        logger.info("Document replaced with %s", handle.pdf_id)

    def clear_document(self) -> None:
        """Forget the current document and its fields."""
        self.document = None
        self.store.clear()
        self.view_state.reset_for_new_document()

    def is_supported_signature(self, path: str) -> bool:
        ext = os.path.splitext(path)[1].lstrip(".").lower()
        return ext in self.signature_formats

    def set_signature_image(self, path: str) -> bool:
        """
        Remember the signature image to burn into signature fields.

        Returns:
            False if the file type is not supported
        """
        if not self.is_supported_signature(path):
            return False
        self.signature_image_path = path
        return True

    @property
    def signature_image_name(self) -> Optional[str]:
        if not self.signature_image_path:
            return None
        return os.path.basename(self.signature_image_path)

    def build_sign_request(self) -> SignRequest:
        """
        Check preconditions and assemble the sign request.

        Raises:
            SignPreconditionError: Missing document, signature image or
                signature field
        """
        if self.document is None:
            raise SignPreconditionError("Upload a PDF first")
        if not self.signature_image_path:
            raise SignPreconditionError("Upload a signature image first")
        if not self.store.has_field_of_type(FieldType.SIGNATURE):
            raise SignPreconditionError("Place at least one signature field on the PDF")

        try:
            signature = file_to_data_url(self.signature_image_path)
        except OSError as e:
            raise SignPreconditionError(f"Cannot read signature image: {e}") from e

        return SignRequest(
            pdf_id=self.document.pdf_id,
            signature_image_base64=signature,
            fields=serialize_fields(self.store.fields),
        )
