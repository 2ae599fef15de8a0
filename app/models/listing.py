from datetime import datetime

from pydantic import Field

from app.core.ids import gen_id, utcnow
from app.models.base import ModerationStatus, RecordModel


MAX_IMAGES = 5


class Listing(RecordModel):
    id: str = Field(default_factory=lambda: gen_id("lst"))

    title: str
    description: str = ""
    price: float = Field(ge=0)
    city: str
    commune: str
    neighborhood: str
    # guarantee / deposit terms, free text
    guarantee: str = ""
    location: str = ""

    # stored file references, e.g. "/uploads/1700000000000-<uuid>.jpg"
    images: list[str] = Field(default_factory=list, max_length=MAX_IMAGES)

    # weak reference to a User id
    author: str | None = None

    status: ModerationStatus = ModerationStatus.pending
    rejection_reason: str | None = None
    published_at: datetime = Field(default_factory=utcnow)
