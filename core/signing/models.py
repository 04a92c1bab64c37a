from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class DocumentHandle:
    """A document stored by the signing service."""
    pdf_id: str
    url: str  # absolute URL of the uploaded PDF

    @property
    def short_id(self) -> str:
        return f"{self.pdf_id[:8]}..."


@dataclass
class SignRequest:
    """Body of a sign request."""
    pdf_id: str
    signature_image_base64: str  # data URL
    fields: List[Dict] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "pdfId": self.pdf_id,
            "signatureImageBase64": self.signature_image_base64,
            "fields": self.fields,
        }
