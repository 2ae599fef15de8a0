from app.models.user import User
from app.schemas.common import ApiModel


class UserCreate(ApiModel):
    name: str | None = None
    phone: str | None = None


class UserCreatedOut(ApiModel):
    message: str
    user: User
