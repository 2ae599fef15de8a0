from app.models.base import ModerationStatus, RecordModel  # noqa: F401

from app.models.listing import Listing  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.payment import DEFAULT_PAYMENT_METHOD, Payment, Transaction  # noqa: F401
