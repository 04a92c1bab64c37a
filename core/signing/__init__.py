"""
Remote signing service: wire format, client and in-flight tracking.

The Qt workers live in core.signing.workers and are imported from there.
"""
from .busy import BusyFlag
from .client import SigningServiceClient, create_client
from .models import DocumentHandle, SignRequest
from .serialization import file_to_data_url, serialize_field, serialize_fields

__all__ = [
    "BusyFlag",
    "SigningServiceClient",
    "create_client",
    "DocumentHandle",
    "SignRequest",
    "file_to_data_url",
    "serialize_field",
    "serialize_fields",
]
