from fastapi import APIRouter, Depends

from app.core.deps import Backend, get_backend
from app.schemas.user import UserCreate, UserCreatedOut

router = APIRouter()


@router.post("/users", response_model=UserCreatedOut)
async def signup(payload: UserCreate, backend: Backend = Depends(get_backend)) -> UserCreatedOut:
    user = await backend.users.create(payload.name, payload.phone)
    return UserCreatedOut(message="User created", user=user)
