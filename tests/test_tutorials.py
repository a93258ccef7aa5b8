import asyncio

import httpx
import pytest
from fastapi import HTTPException

from barberbook.domain.tutorials.catalog import TUTORIAL_IMAGE_PROMPTS, find_tutorial
from barberbook.domain.tutorials.service import TutorialService
from barberbook.models import Profile, TutorialImage, TutorialVideo
from barberbook.services import http_client, image_gateway

IMAGE_DATA_URL = "data:image/png;base64,iVBORw0KGgo="


def gateway(monkeypatch, status_code=200, payload=None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload or {})

    monkeypatch.setattr(image_gateway, "AI_GATEWAY_API_KEY", "gateway-key")
    monkeypatch.setattr(http_client, "_transport", httpx.MockTransport(handler))


def image_response(url=IMAGE_DATA_URL):
    return {"choices": [{"message": {"images": [{"image_url": {"url": url}}]}}]}


def test_catalog_ids_are_unique():
    ids = [t["tutorial_id"] for t in TUTORIAL_IMAGE_PROMPTS]
    assert len(ids) == len(set(ids))
    assert find_tutorial("intro-1")["category_id"] == "primeiros-passos"
    assert find_tutorial("nope") is None


def test_generate_single_image(db, barbershop, monkeypatch):
    gateway(monkeypatch, payload=image_response())

    result = asyncio.run(TutorialService(db).generate_images(barbershop.id, "intro-1"))

    assert result["generated"] == 1
    assert result["total"] == 1
    image = db.query(TutorialImage).filter(TutorialImage.tutorial_id == "intro-1").one()
    assert image.image_url == IMAGE_DATA_URL
    assert image.category_id == "primeiros-passos"


def test_regenerating_replaces_image(db, barbershop, monkeypatch):
    gateway(monkeypatch, payload=image_response("data:image/png;base64,AAAA"))
    asyncio.run(TutorialService(db).generate_images(barbershop.id, "intro-1"))
    gateway(monkeypatch, payload=image_response("data:image/png;base64,BBBB"))
    asyncio.run(TutorialService(db).generate_images(barbershop.id, "intro-1"))

    images = db.query(TutorialImage).filter(TutorialImage.barbershop_id == barbershop.id).all()
    assert len(images) == 1
    assert images[0].image_url.endswith("BBBB")


@pytest.mark.parametrize(
    "status_code,payload,expected",
    [
        (429, {}, "rate_limited"),
        (402, {}, "payment_required"),
        (200, {"choices": [{"message": {"content": "sorry"}}]}, "no_image"),
        (500, {}, "error"),
    ],
)
def test_failed_generation_is_reported(db, barbershop, monkeypatch, status_code, payload, expected):
    gateway(monkeypatch, status_code=status_code, payload=payload)

    result = asyncio.run(TutorialService(db).generate_images(barbershop.id, "agenda-1"))

    assert result["generated"] == 0
    assert result["results"][0]["status"] == expected
    assert db.query(TutorialImage).count() == 0


def test_unknown_tutorial(db, barbershop):
    with pytest.raises(HTTPException) as exc:
        asyncio.run(TutorialService(db).generate_images(barbershop.id, "unknown"))
    assert exc.value.status_code == 404


def test_videos_are_grouped_by_category(client, db, barbershop, owner, headers_for):
    headers = headers_for(owner)
    created = client.post(
        f"/barbershops/{barbershop.id}/tutorials/videos",
        json={
            "category_id": "financeiro",
            "title": "Fechamento do caixa",
            "video_url": "https://videos.example.com/caixa.mp4",
        },
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["category_title"] == "4. Financeiro"

    listed = client.get(f"/barbershops/{barbershop.id}/tutorials/videos", headers=headers)
    assert listed.status_code == 200
    categories = listed.json()
    assert [c["category_id"] for c in categories] == ["financeiro"]
    assert categories[0]["videos"][0]["title"] == "Fechamento do caixa"


def test_global_video_needs_super_admin(client, db, barbershop, owner, headers_for):
    response = client.post(
        f"/barbershops/{barbershop.id}/tutorials/videos",
        json={
            "category_id": "dashboard",
            "title": "Tour do painel",
            "video_url": "https://videos.example.com/tour.mp4",
            "is_global": True,
        },
        headers=headers_for(owner),
    )
    assert response.status_code == 403


def test_global_video_cannot_be_edited_by_shop_admin(client, db, barbershop, owner, headers_for):
    video = TutorialVideo(
        barbershop_id=None,
        category_id="dashboard",
        category_title="5. Dashboard",
        title="Tour do painel",
        video_url="https://videos.example.com/tour.mp4",
    )
    db.add(video)
    db.commit()

    response = client.delete(
        f"/barbershops/{barbershop.id}/tutorials/videos/{video.id}", headers=headers_for(owner)
    )
    assert response.status_code == 403

    db.add(Profile(id="root-admin", full_name="Root", role="super_admin"))
    db.commit()
    super_admin = db.query(Profile).filter(Profile.id == "root-admin").one()
    response = client.delete(
        f"/barbershops/{barbershop.id}/tutorials/videos/{video.id}", headers=headers_for(super_admin)
    )
    assert response.status_code == 200
