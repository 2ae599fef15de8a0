from pydantic import Field

from app.core.ids import gen_id
from app.models.base import RecordModel


class User(RecordModel):
    id: str = Field(default_factory=lambda: gen_id("usr"))
    name: str
    phone: str
    # informational only, never synced with listing deletion
    listings: list[str] = Field(default_factory=list)
