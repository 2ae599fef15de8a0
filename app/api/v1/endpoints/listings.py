from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.core.deps import Backend, get_backend
from app.models.listing import Listing
from app.schemas.listing import ListingCreatedOut, ListingSubmission
from app.services.uploads import ingest_images

router = APIRouter()


@router.get("/listings", response_model=list[Listing])
async def list_public_listings(backend: Backend = Depends(get_backend)) -> list[Listing]:
    return await backend.listings.list_public()


@router.get("/listings/{listing_id}", response_model=Listing)
async def get_listing(listing_id: str, backend: Backend = Depends(get_backend)) -> Listing:
    return await backend.listings.get_by_id(listing_id)


@router.post("/listings", response_model=ListingCreatedOut)
async def submit_listing(
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    price: str | None = Form(default=None),
    city: str | None = Form(default=None),
    commune: str | None = Form(default=None),
    neighborhood: str | None = Form(default=None),
    guarantee: str | None = Form(default=None),
    location: str | None = Form(default=None),
    author: str | None = Form(default=None),
    images: list[UploadFile] | None = File(default=None),
    backend: Backend = Depends(get_backend),
) -> ListingCreatedOut:
    refs = await ingest_images(
        images or [],
        store=backend.files,
        max_size=backend.settings.max_image_size,
    )
    fields = ListingSubmission(
        title=title,
        description=description,
        price=price,
        city=city,
        commune=commune,
        neighborhood=neighborhood,
        guarantee=guarantee,
        location=location,
        author=author,
    )
    listing = await backend.listings.create(fields, refs)
    return ListingCreatedOut(message="Listing submitted, pending validation", listing=listing)
