from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from app.models.enums import SignerRole


class CamelModel(BaseModel):
    """Wire models of the signing UI use camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignSessionRead(CamelModel):
    """Signing session returned by GET /api/sign/{token}"""
    lease_id: int
    role: SignerRole
    recipient_name: str
    recipient_email: str
    lease_html: str


class InitialEntry(CamelModel):
    id: str
    value: str | None = None


class SignatureSubmit(CamelModel):
    """Submit a lease signature. Fields are validated by the workflow, not here."""
    signature_data_url: str | None = Field(default=None, description="PNG data URI of the signature")
    signer_name: str | None = None
    signer_email: str | None = None
    consent: bool = False
    initials_data: list[InitialEntry] = Field(default_factory=list)


class SignatureComplete(CamelModel):
    """Response after successful signature"""
    signed_pdf_url: str
    audit_log_url: str
    document_hash: str


class SignSessionCreate(BaseModel):
    role: str


class SignRequestRead(BaseModel):
    id: int
    lease_id: int
    role: SignerRole
    recipient_name: str
    recipient_email: str
    status: str
    expires_at: datetime | None
    sign_url: str

    class Config:
        from_attributes = True
