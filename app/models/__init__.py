from app.models.domain import Lease, SignatureRequest

__all__ = [
    "Lease",
    "SignatureRequest",
]
