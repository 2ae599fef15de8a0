"""
Repositories over the record store.

Each repository owns one collection (payments also own the transaction
ledger). Mutations load the whole collection, change it and save it back
while holding the collection lock.
"""
from app.repositories.listings import ListingRepository  # noqa: F401
from app.repositories.payments import PaymentRepository  # noqa: F401
from app.repositories.users import UserRepository  # noqa: F401
