import pytest
from pydantic import SecretStr

from app.core.config import UNSET_SECRET
from app.main import create_app

import httpx


FORM = {
    "title": "Maison 4 pièces",
    "description": "Proche du marché",
    "price": "600",
    "city": "Kinshasa",
    "commune": "Limete",
    "neighborhood": "Kingabwa",
}


def jpeg(name: str) -> tuple:
    return ("images", (name, b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg"))


def uploaded_files(settings) -> list:
    return [p for p in settings.upload_dir.iterdir() if p.is_file()]


@pytest.mark.asyncio
async def test_listing_moderation_flow(client, admin_headers, settings):
    r = await client.post("/api/listings", data=FORM, files=[jpeg("a.jpg"), jpeg("b.png")])
    assert r.status_code == 200, r.text
    listing = r.json()["listing"]
    assert listing["status"] == "pending"
    assert len(listing["images"]) == 2
    assert listing["images"][0].startswith("/uploads/")
    assert listing["publishedAt"]

    r = await client.get("/api/listings")
    assert r.json() == []

    r = await client.post(f"/api/admin/listings/{listing['id']}/approve")
    assert r.status_code == 403
    assert r.json()["code"] == "forbidden"

    r = await client.post(f"/api/admin/listings/{listing['id']}/approve", headers=admin_headers)
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "approved"

    r = await client.get("/api/listings")
    assert [l["id"] for l in r.json()] == [listing["id"]]

    image = listing["images"][0]
    r = await client.get(image)
    assert r.status_code == 200
    assert r.content == b"\xff\xd8\xff\xe0fake-jpeg"

    r = await client.delete(f"/api/admin/listings/{listing['id']}", headers=admin_headers)
    assert r.status_code == 200, r.text

    r = await client.get(f"/api/listings/{listing['id']}")
    assert r.status_code == 404
    r = await client.get(image)
    assert r.status_code == 404
    assert uploaded_files(settings) == []


@pytest.mark.asyncio
async def test_invalid_listing_discards_uploads(client, settings):
    r = await client.post("/api/listings", data={**FORM, "price": "abc"}, files=[jpeg("a.jpg")])

    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "validation_error"
    assert [d["field"] for d in body["details"]] == ["price"]
    assert uploaded_files(settings) == []


@pytest.mark.asyncio
async def test_non_image_upload_rejected(client, settings):
    files = [jpeg("a.jpg"), ("images", ("notes.txt", b"hello", "text/plain"))]
    r = await client.post("/api/listings", data=FORM, files=files)

    assert r.status_code == 400
    assert r.json()["details"][0]["field"] == "images"
    assert uploaded_files(settings) == []


@pytest.mark.asyncio
async def test_oversized_upload_rejected(settings):
    app = create_app(settings.model_copy(update={"max_image_size": 8}))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.post("/api/listings", data=FORM, files=[jpeg("big.jpg")])

    assert r.status_code == 400
    assert uploaded_files(settings) == []


@pytest.mark.asyncio
async def test_seven_images_stores_five(client, settings):
    files = [jpeg(f"{i}.jpg") for i in range(7)]
    r = await client.post("/api/listings", data=FORM, files=files)

    assert r.status_code == 200, r.text
    assert len(r.json()["listing"]["images"]) == 5
    assert len(uploaded_files(settings)) == 5


@pytest.mark.asyncio
async def test_reject_listing_with_reason(client, admin_headers):
    r = await client.post("/api/listings", data=FORM)
    listing_id = r.json()["listing"]["id"]

    r = await client.post(
        f"/api/admin/listings/{listing_id}/reject",
        json={"reason": "photos manquantes"},
        headers=admin_headers,
    )
    assert r.status_code == 200, r.text
    assert r.json()["rejectionReason"] == "photos manquantes"

    r = await client.post(f"/api/admin/listings/{listing_id}/approve", headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["code"] == "invalid_transition"


@pytest.mark.asyncio
async def test_payment_flow_and_stats(client, admin_headers, settings):
    r = await client.post("/api/users", json={"name": " Ben ", "phone": "+243810000000"})
    assert r.status_code == 200, r.text
    user = r.json()["user"]
    assert user["name"] == "Ben"
    assert user["listings"] == []

    r = await client.post(
        "/api/payments",
        json={"userRef": user["id"], "listingRef": "lst_1", "amount": 30, "reference": "MP-001"},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    payment = body["payment"]
    assert settings.payment_phone in body["message"]
    assert payment["receivingPhone"] == settings.payment_phone
    assert payment["method"] == "mobile_money"

    r = await client.get(f"/api/payments/{payment['id']}")
    assert r.json()["status"] == "pending"

    r = await client.post(f"/api/admin/payments/{payment['id']}/approve", headers=admin_headers)
    assert r.status_code == 200, r.text
    assert r.json()["transaction"]["amount"] == 30

    r = await client.post(f"/api/admin/payments/{payment['id']}/approve", headers=admin_headers)
    assert r.json()["transaction"] is None

    r = await client.get("/api/admin/stats", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"totalMaisons": 0, "totalUsers": 1, "totalPaiements": 1, "revenusTotaux": 30}

    r = await client.get("/api/admin/payments", headers=admin_headers)
    assert [p["id"] for p in r.json()] == [payment["id"]]

    r = await client.delete(f"/api/admin/users/{user['id']}", headers=admin_headers)
    assert r.status_code == 200
    r = await client.get("/api/admin/users", headers=admin_headers)
    assert r.json() == []

    lines = settings.audit_log_path.read_text(encoding="utf-8").splitlines()
    assert [line.split(" | ")[1] for line in lines] == ["APPROVE_PAYMENT", "APPROVE_PAYMENT", "DELETE_USER"]


@pytest.mark.asyncio
async def test_payment_validation_error(client):
    r = await client.post("/api/payments", json={"userRef": "usr_1", "amount": "abc"})

    assert r.status_code == 400
    assert [d["field"] for d in r.json()["details"]] == ["listingRef", "amount"]


@pytest.mark.asyncio
async def test_admin_endpoints_require_key(client):
    for method, url in [
        ("GET", "/api/admin/listings"),
        ("GET", "/api/admin/payments"),
        ("GET", "/api/admin/users"),
        ("GET", "/api/admin/stats"),
        ("DELETE", "/api/admin/users/usr_1"),
    ]:
        r = await client.request(method, url, headers={"Authorization": "wrong"})
        assert r.status_code == 403, url


@pytest.mark.asyncio
async def test_signup_with_lone_surrogate(client):
    r = await client.post(
        "/api/users",
        content=b'{"name": "Ben\\ud800", "phone": "1"}',
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == 200, r.text
    assert r.json()["user"]["name"] == "Ben?"


@pytest.mark.asyncio
async def test_placeholder_admin_password_opens_nothing(settings):
    app = create_app(settings.model_copy(update={"admin_password": SecretStr(UNSET_SECRET)}))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/api/admin/stats", headers={"Authorization": UNSET_SECRET})

    assert r.status_code == 403
