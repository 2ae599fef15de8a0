from fastapi import APIRouter, Depends

from app.core.deps import Backend, get_backend
from app.models.payment import Payment
from app.schemas.payment import PaymentCreate, PaymentCreatedOut

router = APIRouter()


@router.post("/payments", response_model=PaymentCreatedOut)
async def record_payment(payload: PaymentCreate, backend: Backend = Depends(get_backend)) -> PaymentCreatedOut:
    payment, instructions = await backend.payments.create(
        payload.user_ref,
        payload.listing_ref,
        payload.amount,
        reference=payload.reference,
        method=payload.method,
    )
    return PaymentCreatedOut(message=instructions, payment=payment)


@router.get("/payments/{payment_id}", response_model=Payment)
async def get_payment(payment_id: str, backend: Backend = Depends(get_backend)) -> Payment:
    return await backend.payments.get_by_id(payment_id)
