from enum import Enum


class SignerRole(str, Enum):
    TENANT = "tenant"
    LANDLORD = "landlord"


class SignatureRequestStatus(str, Enum):
    SENT = "sent"
    SIGNED = "signed"


class TabKind(str, Enum):
    INITIAL = "initial"
    SIGNATURE = "signature"


class SignatureMode(str, Enum):
    """How the focused field gets its image."""
    TYPE = "type"
    DRAW = "draw"
