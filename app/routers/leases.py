from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.core.db import get_db
from app.core.exceptions import SignRequestError
from app.models.domain import Lease
from app.models.enums import SignerRole
from app.schemas.common import DataResponse
from app.schemas.lease import LeaseCreate, LeaseRead
from app.schemas.signature import SignSessionCreate, SignRequestRead
from app.services.notifications import sign_url
from app.services.signing import create_sign_request

router = APIRouter(prefix="/leases", tags=["Leases"])


async def _get_lease(db: AsyncSession, lease_id: int) -> Lease:
    result = await db.execute(select(Lease).where(Lease.id == lease_id))
    lease = result.scalar_one_or_none()
    if not lease:
        raise SignRequestError("Lease not found", 404)
    return lease


@router.post("", response_model=DataResponse[LeaseRead], status_code=201)
async def create_lease(
    data: LeaseCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    lease = Lease(**data.model_dump())
    db.add(lease)
    await db.commit()
    await db.refresh(lease)
    return DataResponse(data=LeaseRead.model_validate(lease))


@router.get("/{lease_id}", response_model=DataResponse[LeaseRead])
async def get_lease(
    lease_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    lease = await _get_lease(db, lease_id)
    return DataResponse(data=LeaseRead.model_validate(lease))


@router.post("/{lease_id}/sign-session", response_model=DataResponse[SignRequestRead], status_code=201)
async def create_sign_session(
    lease_id: int,
    data: SignSessionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Issue a signing link for the tenant or the landlord of a lease."""
    try:
        role = SignerRole(data.role)
    except ValueError:
        raise SignRequestError("Invalid role", 400)

    lease = await _get_lease(db, lease_id)
    sign_request = await create_sign_request(db, lease, role)

    return DataResponse(data=SignRequestRead(
        id=sign_request.id,
        lease_id=lease.id,
        role=sign_request.role,
        recipient_name=sign_request.recipient_name,
        recipient_email=sign_request.recipient_email,
        status=sign_request.status.value,
        expires_at=sign_request.expires_at,
        sign_url=sign_url(sign_request.token),
    ))
