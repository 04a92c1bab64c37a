# core/signing/workers.py

from PyQt5.QtCore import QThread, pyqtSignal

from core.errors import SignetError
from .client import SigningServiceClient, describe_error
from .models import SignRequest


class UploadWorker(QThread):
    """Uploads a PDF and downloads the stored copy without freezing the UI."""

    # Signals
    succeeded = pyqtSignal(object, bytes)  # DocumentHandle, pdf bytes
    failed = pyqtSignal(str)  # error message
    progress = pyqtSignal(str)  # status message

    def __init__(self, client: SigningServiceClient, file_path: str, parent=None):
        super().__init__(parent)
        self.client = client
        self.file_path = file_path

    def run(self):
        """Execute the upload in a background thread."""
        try:
            self.progress.emit("Uploading PDF...")
            handle = self.client.upload_pdf(self.file_path)

            self.progress.emit("Loading PDF...")
            data = self.client.fetch_document(handle.url)
        except SignetError as e:
            self.failed.emit(describe_error(e))
        except Exception as e:
            self.failed.emit(f"Unexpected error during upload: {e}")
        else:
            self.succeeded.emit(handle, data)


class SignWorker(QThread):
    """Sends a sign request in a background thread."""

    succeeded = pyqtSignal(str)  # signed PDF URL
    failed = pyqtSignal(str)
    progress = pyqtSignal(str)

    def __init__(self, client: SigningServiceClient, sign_request: SignRequest, parent=None):
        super().__init__(parent)
        self.client = client
        self.sign_request = sign_request

    def run(self):
        try:
            self.progress.emit("Signing...")
            url = self.client.sign_pdf(self.sign_request)
        except SignetError as e:
            self.failed.emit(describe_error(e))
        except Exception as e:
            self.failed.emit(f"Unexpected error during signing: {e}")
        else:
            self.succeeded.emit(url)
