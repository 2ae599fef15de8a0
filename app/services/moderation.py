from __future__ import annotations

import logging

from app.core.errors import AuthorizationError
from app.models.listing import Listing
from app.models.payment import Payment, Transaction
from app.models.user import User
from app.repositories import ListingRepository, PaymentRepository, UserRepository
from app.schemas.stats import Stats
from app.services.audit import AuditLog
from app.services.stats import compute_stats


log = logging.getLogger(__name__)


class ModerationService:
    """
    Admin-only operations.

    Every method takes ``authorized``, the caller's verdict on whether the
    request comes from the administrator, and refuses before touching any
    repository when it is false. Mutations write one audit line after the
    repository change succeeds.
    """

    def __init__(
        self,
        *,
        listings: ListingRepository,
        payments: PaymentRepository,
        users: UserRepository,
        audit_log: AuditLog,
    ):
        self.listings = listings
        self.payments = payments
        self.users = users
        self.audit_log = audit_log

    @staticmethod
    def _require_admin(authorized: bool) -> None:
        if not authorized:
            log.warning("moderation: refused admin action without valid credentials")
            raise AuthorizationError()

    # listings

    async def all_listings(self, *, authorized: bool) -> list[Listing]:
        self._require_admin(authorized)
        return await self.listings.list_all()

    async def validate_listing(self, listing_id: str, *, authorized: bool) -> Listing:
        self._require_admin(authorized)
        listing = await self.listings.validate(listing_id)
        await self.audit_log.audit("APPROVE_LISTING", f"id={listing.id} title={listing.title}")
        return listing

    async def reject_listing(self, listing_id: str, reason: str | None = None, *, authorized: bool) -> Listing:
        self._require_admin(authorized)
        listing = await self.listings.reject(listing_id, reason)
        await self.audit_log.audit("REJECT_LISTING", f"id={listing.id} reason={listing.rejection_reason or 'unspecified'}")
        return listing

    async def delete_listing(self, listing_id: str, *, authorized: bool) -> Listing:
        self._require_admin(authorized)
        listing = await self.listings.delete(listing_id)
        await self.audit_log.audit("DELETE_LISTING", f"id={listing.id} title={listing.title}")
        return listing

    # payments

    async def all_payments(self, *, authorized: bool) -> list[Payment]:
        self._require_admin(authorized)
        return await self.payments.list_all()

    async def approve_payment(self, payment_id: str, *, authorized: bool) -> tuple[Payment, Transaction | None]:
        self._require_admin(authorized)
        payment, txn = await self.payments.approve(payment_id)
        details = f"paymentId={payment.id} amount={payment.amount}"
        if txn is None:
            details += " (already approved)"
        await self.audit_log.audit("APPROVE_PAYMENT", details)
        return payment, txn

    async def reject_payment(self, payment_id: str, reason: str | None = None, *, authorized: bool) -> Payment:
        self._require_admin(authorized)
        payment = await self.payments.reject(payment_id, reason)
        await self.audit_log.audit("REJECT_PAYMENT", f"paymentId={payment.id} reason={payment.rejection_reason or 'unspecified'}")
        return payment

    # users and stats

    async def all_users(self, *, authorized: bool) -> list[User]:
        self._require_admin(authorized)
        return await self.users.list_all()

    async def delete_user(self, user_id: str, *, authorized: bool) -> User:
        self._require_admin(authorized)
        user = await self.users.delete(user_id)
        await self.audit_log.audit("DELETE_USER", f"id={user.id}")
        return user

    async def stats(self, *, authorized: bool) -> Stats:
        self._require_admin(authorized)
        return await compute_stats(listings=self.listings, users=self.users, payments=self.payments)
