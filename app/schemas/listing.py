from app.models.listing import Listing
from app.schemas.common import ApiModel


class ListingSubmission(ApiModel):
    """Raw submitted fields; validated by the listing repository."""

    title: str | None = None
    description: str | None = None
    price: str | None = None
    city: str | None = None
    commune: str | None = None
    neighborhood: str | None = None
    guarantee: str | None = None
    location: str | None = None
    author: str | None = None


class ListingCreatedOut(ApiModel):
    message: str
    listing: Listing


class RejectRequest(ApiModel):
    reason: str | None = None
