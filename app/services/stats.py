from __future__ import annotations

from app.repositories import ListingRepository, PaymentRepository, UserRepository
from app.schemas.stats import Stats


async def compute_stats(
    *,
    listings: ListingRepository,
    users: UserRepository,
    payments: PaymentRepository,
) -> Stats:
    # read straight from the store every time; nothing is cached
    ledger = await payments.list_transactions()
    return Stats(
        total_listings=await listings.count(),
        total_users=await users.count(),
        total_payments=await payments.count(),
        total_revenue=sum(t.amount for t in ledger),
    )
