"""
Document display state and the document session.

PDFDocumentReader needs PyQt5 and is imported from core.document.pdf_reader.
"""
from .document_session import DocumentSession
from .view_state import ViewMode, ViewState

__all__ = ["DocumentSession", "ViewMode", "ViewState"]
