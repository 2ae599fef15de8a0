from datetime import datetime

from pydantic import Field

from app.core.ids import gen_id, utcnow
from app.models.base import ModerationStatus, RecordModel

DEFAULT_PAYMENT_METHOD = "mobile_money"


class Payment(RecordModel):
    id: str = Field(default_factory=lambda: gen_id("pay"))

    # weak references, existence is not checked
    user_ref: str
    listing_ref: str

    amount: float = Field(gt=0)
    reference: str | None = None
    method: str = DEFAULT_PAYMENT_METHOD

    status: ModerationStatus = ModerationStatus.pending
    rejection_reason: str | None = None
    created_at: datetime = Field(default_factory=utcnow)

    # snapshot of the configured destination number at creation time
    receiving_phone: str


class Transaction(RecordModel):
    """Ledger entry written once, when its payment is approved."""

    id: str = Field(default_factory=lambda: gen_id("txn"))
    payment_ref: str
    amount: float
    timestamp: datetime = Field(default_factory=utcnow)
