from app.models.payment import Payment, Transaction
from app.schemas.common import ApiModel


class PaymentCreate(ApiModel):
    user_ref: str | None = None
    listing_ref: str | None = None
    # kept loose so "abc" or -5 reach the repository and come back as field errors
    amount: float | str | None = None
    reference: str | None = None
    method: str | None = None


class PaymentCreatedOut(ApiModel):
    message: str
    payment: Payment


class PaymentApprovedOut(ApiModel):
    payment: Payment
    # null when the payment had already been approved
    transaction: Transaction | None = None
