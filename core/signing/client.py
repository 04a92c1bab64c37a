"""
HTTP client for the remote upload/sign service.
"""
import json
import logging
import os
import uuid
from typing import Dict, Optional, Tuple
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from core.errors import DocumentFetchError, ServiceError, SignError, UploadError
from .models import DocumentHandle, SignRequest

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/api/upload-pdf"
SIGN_PATH = "/api/sign-pdf"


def encode_multipart(field_name: str, filename: str, content: bytes,
                     content_type: str = "application/pdf") -> Tuple[bytes, str]:
    """
    Encode a single file as multipart/form-data.

    Returns:
        Tuple of (body, Content-Type header value)
    """
    boundary = f"----signet{uuid.uuid4().hex}"
    head = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'
        f"Content-Type: {content_type}\r\n\r\n"
    ).encode("utf-8")
    tail = f"\r\n--{boundary}--\r\n".encode("utf-8")
    return head + content + tail, f"multipart/form-data; boundary={boundary}"


class SigningServiceClient:
    """Talks to the signing backend: uploads documents and requests signatures."""

    def __init__(self, base_url: str, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def absolute_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def upload_pdf(self, file_path: str) -> DocumentHandle:
        """
        Upload a PDF document.

        Args:
            file_path: Path of the PDF on disk

        Returns:
            Handle with the service's document id and absolute URL

        Raises:
            UploadError: The file could not be read or the service failed
        """
        try:
            with open(file_path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise UploadError(f"Cannot read {file_path}: {e}") from e

        body, content_type = encode_multipart("pdf", os.path.basename(file_path), content)
        data = self._request_json(
            Request(
                self.absolute_url(UPLOAD_PATH),
                data=body,
                headers={"Content-Type": content_type},
                method="POST",
            ),
            UploadError,
        )
        pdf_id = data.get("pdfId")
        pdf_url = data.get("pdfUrl")
        if not pdf_id or not pdf_url:
            raise UploadError("Upload response is missing pdfId or pdfUrl")
        logger.info("Uploaded %s as %s", file_path, pdf_id)
        return DocumentHandle(pdf_id=str(pdf_id), url=self.absolute_url(pdf_url))

    def sign_pdf(self, sign_request: SignRequest) -> str:
        """
        Ask the service to burn fields and the signature into the document.

        Args:
            sign_request: Document id, signature image and serialized fields

        Returns:
            Absolute URL of the signed PDF

        Raises:
            SignError: The service failed or answered without a URL
        """
        body = json.dumps(sign_request.to_dict()).encode("utf-8")
        data = self._request_json(
            Request(
                self.absolute_url(SIGN_PATH),
                data=body,
                headers={"Content-Type": "application/json"},
                method="POST",
            ),
            SignError,
        )
        signed_url = data.get("signedPdfUrl")
        if not signed_url:
            raise SignError("Sign response is missing signedPdfUrl")
        logger.info("Signed %s with %d fields", sign_request.pdf_id, len(sign_request.fields))
        return self.absolute_url(signed_url)

    def fetch_document(self, url: str) -> bytes:
        """
        Download a document.

        Raises:
            DocumentFetchError: The download failed
        """
        try:
            with urlopen(Request(url, method="GET"), timeout=self.timeout) as response:
                return response.read()
        except HTTPError as e:
            raise DocumentFetchError(f"Download failed with HTTP {e.code}", status=e.code) from e
        except (URLError, OSError) as e:
            raise DocumentFetchError(f"Download failed: {e}") from e

    def _request_json(self, request: Request, error_cls=ServiceError) -> Dict:
        try:
            with urlopen(request, timeout=self.timeout) as response:
                raw = response.read()
        except HTTPError as e:
            raise error_cls(f"Service answered HTTP {e.code}", status=e.code) from e
        except (URLError, OSError) as e:
            raise error_cls(f"Service unreachable: {e}") from e

        try:
            payload = json.loads(raw.decode("utf-8", errors="ignore"))
        except ValueError as e:
            raise error_cls("Service answered with invalid JSON") from e
        if not isinstance(payload, dict):
            raise error_cls("Service answered with unexpected JSON")
        return payload


def create_client(config) -> SigningServiceClient:
    return SigningServiceClient(config.backend_base_url, timeout=config.request_timeout)


def describe_error(error: Optional[BaseException]) -> str:
    """Short, user-facing text for a service failure."""
    if error is None:
        return "Unknown error"
    return str(error) or error.__class__.__name__
