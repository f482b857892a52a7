from datetime import date, datetime
from sqlalchemy import String, Date, DateTime, Integer, Numeric, Text, Enum as SAEnum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.db import Base
from app.models.base import TimestampMixin
from app.models.enums import SignerRole, SignatureRequestStatus


class Lease(Base, TimestampMixin):
    __tablename__ = "leases"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    landlord_name: Mapped[str] = mapped_column(String(200), nullable=False)
    landlord_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tenant_name: Mapped[str] = mapped_column(String(200), nullable=False)
    tenant_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    property_name: Mapped[str] = mapped_column(String(200), nullable=False)
    unit_name: Mapped[str] = mapped_column(String(100), nullable=False)
    unit_type: Mapped[str] = mapped_column(String(50), nullable=False)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)  # None = month-to-month
    rent_amount: Mapped[int] = mapped_column(Numeric(12, 2), nullable=False)
    billing_day_of_month: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    tenant_signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    landlord_signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    signature_requests: Mapped[list["SignatureRequest"]] = relationship(
        "SignatureRequest", back_populates="lease", cascade="all, delete-orphan"
    )

    @property
    def property_label(self) -> str:
        return f"{self.property_name} - {self.unit_name} ({self.unit_type})"


class SignatureRequest(Base, TimestampMixin):
    __tablename__ = "signature_requests"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    token: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    role: Mapped[SignerRole] = mapped_column(SAEnum(SignerRole, native_enum=False, length=20), nullable=False)
    recipient_name: Mapped[str] = mapped_column(String(200), nullable=False)
    recipient_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    status: Mapped[SignatureRequestStatus] = mapped_column(
        SAEnum(SignatureRequestStatus, native_enum=False, length=20),
        default=SignatureRequestStatus.SENT,
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Filled when signed
    signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    signer_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    signer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    signer_ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    signer_user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    signed_pdf_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    audit_log_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    document_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)
    initials_data: Mapped[str | None] = mapped_column(Text, nullable=True)  # JSON array of {id, value}

    lease_id: Mapped[int] = mapped_column(ForeignKey("leases.id", ondelete="CASCADE"), nullable=False)

    lease: Mapped["Lease"] = relationship("Lease", back_populates="signature_requests")
