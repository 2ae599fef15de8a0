from __future__ import annotations

import logging

from app.core.errors import FieldError, ValidationError
from app.core.store import PAYMENTS, TRANSACTIONS, RecordStore
from app.models.base import ModerationStatus
from app.models.payment import DEFAULT_PAYMENT_METHOD, Payment, Transaction
from app.repositories.base import CollectionRepository, clean, parse_number, utf8_text
from app.services.moderation_state import rejection_reason, should_approve


log = logging.getLogger(__name__)


def payment_instructions(phone: str) -> str:
    return f"Payment recorded. Send the money to {phone} and notify the admin for validation."


class PaymentRepository(CollectionRepository[Payment]):
    """
    Administrator-attested payments and the transaction ledger derived from
    them. Payments are never deleted.
    """

    collection = PAYMENTS
    model = Payment
    entity = "Payment"

    def __init__(self, store: RecordStore, *, receiving_phone: str):
        super().__init__(store)
        self.receiving_phone = receiving_phone

    async def create(
        self,
        user_ref: str | None,
        listing_ref: str | None,
        amount,
        reference: str | None = None,
        method: str | None = None,
    ) -> tuple[Payment, str]:
        errors = []
        if not clean(user_ref):
            errors.append(FieldError("userRef", "required"))
        if not clean(listing_ref):
            errors.append(FieldError("listingRef", "required"))
        value = parse_number(amount)
        if value is None or value <= 0:
            errors.append(FieldError("amount", "must be a positive number"))
        if errors:
            raise ValidationError(errors)

        payment = Payment(
            user_ref=clean(user_ref),
            listing_ref=clean(listing_ref),
            amount=value,
            reference=clean(reference) or None,
            method=clean(method) or DEFAULT_PAYMENT_METHOD,
            receiving_phone=self.receiving_phone,
        )
        async with self.store.locked(self.collection):
            items = await self._load(strict=True)
            items.append(payment)
            await self._save(items)

        log.info("payments: recorded %s amount=%s", payment.id, payment.amount)
        return payment, payment_instructions(payment.receiving_phone)

    async def list_transactions(self) -> list[Transaction]:
        return await self._load(TRANSACTIONS, Transaction)

    async def approve(self, payment_id: str) -> tuple[Payment, Transaction | None]:
        """
        Approve a payment and append its ledger entry as one operation.

        Both collections stay locked for the whole call. The ledger is saved
        before the payment, so a reader that sees the payment approved also
        sees its transaction. Returns ``(payment, None)`` when the payment
        was already approved.
        """
        async with self.store.locked(PAYMENTS, TRANSACTIONS):
            items = await self._load(strict=True)
            payment = self._find(items, payment_id)
            if not should_approve(entity=self.entity, entity_id=payment_id, status=payment.status):
                return payment, None

            ledger = await self._load(TRANSACTIONS, Transaction, strict=True)
            # left over by an attempt whose payment save failed
            txn = next((t for t in ledger if t.payment_ref == payment.id), None)
            if txn is None:
                txn = Transaction(payment_ref=payment.id, amount=payment.amount)
                ledger.append(txn)
                await self._save(ledger, TRANSACTIONS)
            else:
                log.warning("payments: reusing transaction %s for %s", txn.id, payment.id)

            payment.status = ModerationStatus.approved
            await self._save(items)

        log.info("payments: approved %s, transaction %s", payment.id, txn.id)
        return payment, txn

    async def reject(self, payment_id: str, reason: str | None = None) -> Payment:
        # an existing transaction is kept; the ledger is append-only
        async with self.store.locked(self.collection):
            items = await self._load(strict=True)
            payment = self._find(items, payment_id)
            payment.status = ModerationStatus.rejected
            payment.rejection_reason = rejection_reason(utf8_text(reason))
            await self._save(items)
        return payment
