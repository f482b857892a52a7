"""
Server-side lease signing workflow.

1. A sign request (token link) is issued per signer role
2. The signer loads the session: lease HTML with placeholder tokens
3. The signer submits signature + initials + consent
4. The lease PDF is stamped, an audit page appended, hashed and stored
5. After the tenant signs, the landlord gets their own request
"""
import json
import logging
import secrets
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from app.core.config import settings
from app.core.exceptions import SignRequestError
from app.models.domain import Lease, SignatureRequest
from app.models.enums import SignerRole, SignatureRequestStatus
from app.schemas.signature import SignSessionRead, SignatureSubmit, SignatureComplete
from app.services.file_storage import file_storage, FileStorageError
from app.services.lease_template import LeaseTemplateContext, render_lease_html
from app.services.notifications import send_signing_link
from app.services.pdf_service import pdf_service, PDFServiceError

logger = logging.getLogger(__name__)


def generate_token() -> str:
    return secrets.token_hex(24)


def _utcnow() -> datetime:
    return datetime.utcnow()


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return (value - value.utcoffset()).replace(tzinfo=None)
    return value


def is_expired(sign_request: SignatureRequest, now: datetime | None = None) -> bool:
    if sign_request.expires_at is None:
        return False
    return _as_naive_utc(sign_request.expires_at) < (now or _utcnow())


def recipient_for(lease: Lease, role: SignerRole) -> tuple[str, str]:
    if role == SignerRole.TENANT:
        return lease.tenant_name or "Tenant", lease.tenant_email or ""
    return lease.landlord_name or "Landlord", lease.landlord_email or ""


def _new_sign_request(lease: Lease, role: SignerRole) -> SignatureRequest:
    name, email = recipient_for(lease, role)
    return SignatureRequest(
        token=generate_token(),
        lease_id=lease.id,
        role=role,
        recipient_name=name,
        recipient_email=email,
        status=SignatureRequestStatus.SENT,
        expires_at=_utcnow() + timedelta(hours=settings.SIGN_LINK_EXPIRE_HOURS),
    )


async def create_sign_request(db: AsyncSession, lease: Lease, role: SignerRole | str) -> SignatureRequest:
    """Issue a signing link for `role` and email it to the recipient."""
    try:
        role = SignerRole(role)
    except ValueError:
        raise SignRequestError("Invalid role", 400)

    sign_request = _new_sign_request(lease, role)
    db.add(sign_request)
    await db.commit()
    await db.refresh(sign_request)

    logger.info(f"Issued {role.value} sign link for lease {lease.id}")
    await send_signing_link(
        sign_request.recipient_email,
        sign_request.recipient_name,
        sign_request.token,
        "Your lease is ready for review and signature.",
    )
    return sign_request


async def get_sign_request(db: AsyncSession, token: str) -> SignatureRequest:
    result = await db.execute(
        select(SignatureRequest)
        .options(selectinload(SignatureRequest.lease))
        .where(SignatureRequest.token == token)
    )
    sign_request = result.scalar_one_or_none()

    if not sign_request:
        raise SignRequestError("Not found", 404)
    if is_expired(sign_request):
        raise SignRequestError("Link expired", 410)
    if not sign_request.lease:
        raise SignRequestError("Lease not found", 404)
    return sign_request


async def load_sign_session(db: AsyncSession, token: str) -> SignSessionRead:
    sign_request = await get_sign_request(db, token)
    lease = sign_request.lease

    return SignSessionRead(
        lease_id=lease.id,
        role=sign_request.role,
        recipient_name=sign_request.recipient_name,
        recipient_email=sign_request.recipient_email,
        lease_html=render_lease_html(LeaseTemplateContext.from_lease(lease)),
    )


async def complete_signature(
    db: AsyncSession,
    token: str,
    data: SignatureSubmit,
    ip: str = "unknown",
    user_agent: str = "unknown",
) -> SignatureComplete:
    """
    Record a signature for `token`.

    Raises:
        SignRequestError: validation (400), unknown token (404), expired (410),
            already signed (400), stamping/storage failure (500)
    """
    signer_name = (data.signer_name or "").strip()
    signer_email = (data.signer_email or "").strip()
    if not data.signature_data_url or not signer_name or not signer_email or not data.consent:
        raise SignRequestError("Missing signature, name, email, or consent", 400)

    sign_request = await get_sign_request(db, token)
    if sign_request.status == SignatureRequestStatus.SIGNED:
        raise SignRequestError("Already signed", 400)

    lease = sign_request.lease
    role = SignerRole(sign_request.role)
    signed_at = _utcnow()

    audit = {
        "token": token,
        "role": role.value,
        "signerName": signer_name,
        "signerEmail": signer_email,
        "signedAt": signed_at.isoformat(),
        "ip": ip,
        "userAgent": user_agent,
        "leaseId": lease.id,
    }

    try:
        signature_image = pdf_service.decode_signature(data.signature_data_url)
    except PDFServiceError as e:
        raise SignRequestError(f"Failed to process signature: {e}", 400)

    try:
        base_pdf = pdf_service.build_lease_pdf(LeaseTemplateContext.from_lease(lease))
        final_pdf = pdf_service.stamp_signature(
            base_pdf, signature_image, role, signer_name, signer_email, signed_at, audit
        )
        document_hash = pdf_service.document_hash(final_pdf)

        prefix = f"lease-{lease.id}"
        signed_pdf_url = file_storage.save_bytes(final_pdf, f"{role.value}-signed", "pdf", prefix)
        audit_log_url = file_storage.save_bytes(
            json.dumps(audit, indent=2).encode("utf-8"), f"{role.value}-audit", "json", prefix
        )
    except (PDFServiceError, FileStorageError) as e:
        logger.error(f"Failed to stamp signature for lease {lease.id}: {e}", exc_info=True)
        raise SignRequestError(str(e) or "Failed to process signature. Please try again.", 500)

    sign_request.status = SignatureRequestStatus.SIGNED
    sign_request.signed_at = signed_at
    sign_request.signer_name = signer_name
    sign_request.signer_email = signer_email
    sign_request.signer_ip = ip
    sign_request.signer_user_agent = user_agent
    sign_request.signed_pdf_url = signed_pdf_url
    sign_request.audit_log_url = audit_log_url
    sign_request.document_hash = document_hash
    sign_request.initials_data = json.dumps([entry.model_dump() for entry in data.initials_data])

    if role == SignerRole.TENANT:
        lease.tenant_signed_at = signed_at
    else:
        lease.landlord_signed_at = signed_at

    landlord_request = None
    if role == SignerRole.TENANT and not lease.landlord_signed_at:
        landlord_request = await _landlord_follow_up(db, lease)

    await db.commit()
    logger.info(f"Lease {lease.id} signed by {role.value} ({signer_email}), hash {document_hash[:12]}")

    if landlord_request is not None:
        await send_signing_link(
            landlord_request.recipient_email,
            landlord_request.recipient_name,
            landlord_request.token,
            f"{lease.tenant_name or 'Tenant'} has signed. Please sign to complete.",
        )

    return SignatureComplete(
        signed_pdf_url=signed_pdf_url,
        audit_log_url=audit_log_url,
        document_hash=document_hash,
    )


async def _landlord_follow_up(db: AsyncSession, lease: Lease) -> SignatureRequest | None:
    """Create the landlord request after the tenant signed, unless one is pending."""
    result = await db.execute(
        select(SignatureRequest).where(
            SignatureRequest.lease_id == lease.id,
            SignatureRequest.role == SignerRole.LANDLORD,
            SignatureRequest.status != SignatureRequestStatus.SIGNED,
        )
    )
    if result.scalars().first() is not None:
        return None

    if not lease.landlord_email:
        logger.warning(f"Lease {lease.id} has no landlord email, landlord sign link not issued")
        return None

    landlord_request = _new_sign_request(lease, SignerRole.LANDLORD)
    db.add(landlord_request)
    return landlord_request
