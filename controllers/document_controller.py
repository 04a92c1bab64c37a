"""
Controller for uploading documents and requesting signed copies.
"""
import logging
import os
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from core.document import DocumentSession
from core.document.pdf_reader import PDFDocumentReader
from core.errors import SignPreconditionError
from core.signing import BusyFlag, SigningServiceClient
from core.signing.workers import SignWorker, UploadWorker

logger = logging.getLogger(__name__)


class DocumentController(QObject):
    """
    Runs upload and sign requests in worker threads.

    Each kind of request has its own busy flag. The flag is acquired before
    the worker starts and released when the worker reports back, whether
    it succeeded or failed.
    """

    # Signals
    document_loaded = pyqtSignal(object)  # DocumentHandle
    upload_failed = pyqtSignal(str)
    signed = pyqtSignal(str)  # signed PDF URL
    sign_failed = pyqtSignal(str)
    sign_rejected = pyqtSignal(str)  # precondition message
    file_rejected = pyqtSignal(str)  # unsupported file type
    signature_changed = pyqtSignal(str)  # file name
    busy_changed = pyqtSignal(str, bool)  # operation name, busy
    status_message = pyqtSignal(str)

    UPLOAD = "upload"
    SIGN = "sign"

    def __init__(self, session: DocumentSession, client: SigningServiceClient,
                 reader: PDFDocumentReader, field_controller, view_controller,
                 parent: QObject = None):
        super().__init__(parent)
        self.session = session
        self.client = client
        self.reader = reader
        self.fields = field_controller
        self.view = view_controller

        self.upload_flag = BusyFlag(self.UPLOAD)
        self.sign_flag = BusyFlag(self.SIGN)
        self._upload_worker: Optional[UploadWorker] = None
        self._sign_worker: Optional[SignWorker] = None

    @property
    def is_uploading(self) -> bool:
        return self.upload_flag.busy

    @property
    def is_signing(self) -> bool:
        return self.sign_flag.busy

    # ===== Upload =====

    def upload(self, file_path: str) -> bool:
        """
        Upload a local PDF and display the stored copy.

        Returns:
            True if the upload was dispatched
        """
        if not file_path.lower().endswith(".pdf"):
            self.file_rejected.emit(f"{os.path.basename(file_path)} is not a PDF file")
            return False
        if not self.upload_flag.acquire():
            self.status_message.emit("An upload is already in progress")
            return False

        try:
            worker = UploadWorker(self.client, file_path, self)
            worker.progress.connect(self.status_message)
            worker.succeeded.connect(self._on_upload_succeeded)
            worker.failed.connect(self._on_upload_failed)
            worker.finished.connect(worker.deleteLater)
            self._upload_worker = worker
            self.busy_changed.emit(self.UPLOAD, True)
            worker.start()
        except Exception:
            self._finish_upload()
            raise
        return True

    def _on_upload_succeeded(self, handle, data: bytes) -> None:
        try:
            ok, pages = self.reader.load_bytes(data, handle.url)
            if not ok or pages == 0:
                self.session.clear_document()
                self.fields.reset()
                self.view.reset()
                self.upload_failed.emit("The uploaded PDF could not be opened")
                return

            self.session.replace_document(handle)
            self.fields.reset()
            self.view.reset()
            self.view.set_document_info(pages)
            self.status_message.emit(f"Loaded document {handle.short_id} ({pages} pages)")
            self.document_loaded.emit(handle)
        finally:
            self._finish_upload()

    def _on_upload_failed(self, message: str) -> None:
        try:
            logger.error("Upload failed: %s", message)
            self.upload_failed.emit(message)
        finally:
            self._finish_upload()

    def _finish_upload(self) -> None:
        self.upload_flag.release()
        self._upload_worker = None
        self.busy_changed.emit(self.UPLOAD, False)

    # ===== Signature image =====

    def set_signature_image(self, path: str) -> bool:
        if not self.session.set_signature_image(path):
            formats = ", ".join(self.session.signature_formats)
            self.file_rejected.emit(f"Signature image must be one of: {formats}")
            return False
        self.signature_changed.emit(self.session.signature_image_name)
        return True

    # ===== Sign =====

    def sign(self) -> bool:
        """
        Request a signed copy of the current document.

        Returns:
            True if the request was dispatched
        """
        try:
            sign_request = self.session.build_sign_request()
        except SignPreconditionError as e:
            self.sign_rejected.emit(str(e))
            return False

        if not self.sign_flag.acquire():
            self.status_message.emit("Signing is already in progress")
            return False

        try:
            worker = SignWorker(self.client, sign_request, self)
            worker.progress.connect(self.status_message)
            worker.succeeded.connect(self._on_sign_succeeded)
            worker.failed.connect(self._on_sign_failed)
            worker.finished.connect(worker.deleteLater)
            self._sign_worker = worker
            self.busy_changed.emit(self.SIGN, True)
            worker.start()
        except Exception:
            self._finish_sign()
            raise
        return True

    def _on_sign_succeeded(self, url: str) -> None:
        try:
            self.status_message.emit("Signed PDF ready")
            self.signed.emit(url)
        finally:
            self._finish_sign()

    def _on_sign_failed(self, message: str) -> None:
        try:
            logger.error("Signing failed: %s", message)
            self.sign_failed.emit(message)
        finally:
            self._finish_sign()

    def _finish_sign(self) -> None:
        self.sign_flag.release()
        self._sign_worker = None
        self.busy_changed.emit(self.SIGN, False)
