from fastapi import APIRouter, Depends

from app.core.deps import Backend, get_backend
from app.models.listing import Listing
from app.models.payment import Payment
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.listing import RejectRequest
from app.schemas.payment import PaymentApprovedOut
from app.schemas.stats import Stats
from app.services.auth import is_admin

router = APIRouter(prefix="/admin")


# Listings

@router.get("/listings", response_model=list[Listing])
async def all_listings(
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> list[Listing]:
    return await backend.moderation.all_listings(authorized=authorized)


@router.post("/listings/{listing_id}/approve", response_model=Listing)
async def approve_listing(
    listing_id: str,
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> Listing:
    return await backend.moderation.validate_listing(listing_id, authorized=authorized)


@router.post("/listings/{listing_id}/reject", response_model=Listing)
async def reject_listing(
    listing_id: str,
    payload: RejectRequest | None = None,
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> Listing:
    reason = payload.reason if payload else None
    return await backend.moderation.reject_listing(listing_id, reason, authorized=authorized)


@router.delete("/listings/{listing_id}", response_model=MessageResponse)
async def delete_listing(
    listing_id: str,
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> MessageResponse:
    await backend.moderation.delete_listing(listing_id, authorized=authorized)
    return MessageResponse(message="Listing deleted")


# Payments

@router.get("/payments", response_model=list[Payment])
async def all_payments(
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> list[Payment]:
    return await backend.moderation.all_payments(authorized=authorized)


@router.post("/payments/{payment_id}/approve", response_model=PaymentApprovedOut)
async def approve_payment(
    payment_id: str,
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> PaymentApprovedOut:
    payment, txn = await backend.moderation.approve_payment(payment_id, authorized=authorized)
    return PaymentApprovedOut(payment=payment, transaction=txn)


@router.post("/payments/{payment_id}/reject", response_model=Payment)
async def reject_payment(
    payment_id: str,
    payload: RejectRequest | None = None,
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> Payment:
    reason = payload.reason if payload else None
    return await backend.moderation.reject_payment(payment_id, reason, authorized=authorized)


# Users & stats

@router.get("/users", response_model=list[User])
async def all_users(
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> list[User]:
    return await backend.moderation.all_users(authorized=authorized)


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> MessageResponse:
    await backend.moderation.delete_user(user_id, authorized=authorized)
    return MessageResponse(message="User deleted")


@router.get("/stats", response_model=Stats)
async def stats(
    authorized: bool = Depends(is_admin),
    backend: Backend = Depends(get_backend),
) -> Stats:
    return await backend.moderation.stats(authorized=authorized)
