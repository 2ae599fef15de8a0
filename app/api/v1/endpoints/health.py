from fastapi import APIRouter, Depends

from app.core.deps import Backend, get_backend
from app.core.ids import iso_timestamp
from app.schemas.common import HealthOut

router = APIRouter()


@router.get("/health", response_model=HealthOut)
async def health(backend: Backend = Depends(get_backend)) -> HealthOut:
    return HealthOut(ok=True, server=backend.settings.service_name, time=iso_timestamp())
