"""
Lease signing workflow.

Endpoints:
- GET /api/sign/{token} - Signing session: lease HTML with placeholders, role, recipient
- POST /api/sign/{token} - Submit signature, initials and consent

Errors are returned as {"message": ...}.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_db
from app.schemas.signature import SignSessionRead, SignatureSubmit, SignatureComplete
from app.services.signing import load_sign_session, complete_signature

router = APIRouter(prefix="/api/sign", tags=["Signatures"])


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.get("/{token}", response_model=SignSessionRead)
async def get_sign_session(
    token: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Load the signing session for a token.

    Called when the signer opens the signing link. Returns 404 for unknown
    tokens and 410 once the link has expired.
    """
    return await load_sign_session(db, token)


@router.post("/{token}", response_model=SignatureComplete)
async def submit_signature(
    token: str,
    data: SignatureSubmit,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """
    Submit the signature and record it on the lease.

    Workflow:
    1. Validate signature, name, email and consent
    2. Verify token (exists, not expired, not already signed)
    3. Render the lease PDF and stamp signature + signer details
    4. Append the audit page, hash and store the document
    5. Mark the request signed and update the lease
    6. After a tenant signature, issue the landlord's sign link
    """
    return await complete_signature(
        db,
        token,
        data,
        ip=get_client_ip(request),
        user_agent=request.headers.get("user-agent", "unknown"),
    )
