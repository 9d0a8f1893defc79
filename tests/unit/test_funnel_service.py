"""Unit tests for funnel service"""
import re

import pytest

from breadmade.core.exceptions import ServiceError
from breadmade.schemas.funnel import FunnelCreate, FunnelUpdate
from breadmade.services.funnel_service import FunnelService, generate_funnel_id, to_base36
from tests.helpers import make_row, request_json

FUNNELS = "/rest/v1/funnels"
CATEGORIES = "/rest/v1/categories"


def funnel_row(**fields):
    row = {"id": "f-1", "funnel_id": "sales-page-abc", "title": "Sales Page", "active": True}
    row.update(fields)
    return make_row(**row)


def test_to_base36():
    """Test base-36 rendering"""
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    assert to_base36(1700000000000) == "loyw3v28"


def test_generate_funnel_id_slug():
    """Test titles are slugged and suffixed with the timestamp"""
    assert generate_funnel_id("High-Converting E-commerce Funnel!", 36) == "highconverting-ecommerce-funne-10"
    assert generate_funnel_id("Sales  Page", 35) == "sales-page-z"


def test_generate_funnel_id_uses_current_time():
    """Test the suffix defaults to the current millisecond timestamp"""
    funnel_id = generate_funnel_id("Webinar Funnel")
    assert re.fullmatch(r"webinar-funnel-[0-9a-z]+", funnel_id)


@pytest.mark.asyncio
async def test_get_funnels_only_active(store, backend):
    """Test listing asks for active funnels only"""
    backend.add("GET", FUNNELS, [funnel_row()])

    funnels = await FunnelService(store).get_funnels()

    assert funnels[0].funnel_id == "sales-page-abc"
    params = backend.last("GET", FUNNELS).url.params
    assert params["active"] == "eq.true"
    assert params["order"] == "created_at.desc"


@pytest.mark.asyncio
async def test_get_funnel_with_category(store, backend):
    """Test the embedded category is parsed"""
    backend.add("GET", FUNNELS, funnel_row(category_id="c-1", category={"id": "c-1", "name": "Ecommerce"}))

    funnel = await FunnelService(store).get_funnel_by_id_with_category("f-1")

    assert funnel.category.name == "Ecommerce"
    assert backend.last("GET", FUNNELS).url.params["select"] == "*,category:categories(*)"


@pytest.mark.asyncio
async def test_get_funnel_by_funnel_id_missing(store, backend):
    """Test a missing public id returns None"""
    backend.fail("GET", FUNNELS, "no rows", status_code=406)

    assert await FunnelService(store).get_funnel_by_funnel_id("missing") is None
    assert backend.last("GET", FUNNELS).url.params["funnel_id"] == "eq.missing"


@pytest.mark.asyncio
async def test_create_funnel_generates_public_id(store, backend):
    """Test new funnels are active and get a generated public id"""
    backend.add("POST", FUNNELS, funnel_row(), status_code=201)

    await FunnelService(store).create_funnel(FunnelCreate(title="Sales Page", description=""))

    body = request_json(backend.last("POST", FUNNELS))[0]
    assert body["funnel_id"].startswith("sales-page-")
    assert body["active"] is True
    assert body["description"] is None
    assert body["is_available_for_lease"] is False


@pytest.mark.asyncio
async def test_update_funnel_failure_raises(store, backend):
    """Test a failed update raises with the remote message"""
    backend.fail("PATCH", FUNNELS, "value too long")

    with pytest.raises(ServiceError, match="Failed to update funnel: value too long"):
        await FunnelService(store).update_funnel("f-1", FunnelUpdate(title="x" * 500))


@pytest.mark.asyncio
async def test_delete_funnel_is_soft(store, backend):
    """Test deleting a funnel only clears its active flag"""
    backend.add("PATCH", FUNNELS, [funnel_row(active=False)])

    assert await FunnelService(store).delete_funnel("f-1") is True

    assert backend.sent("DELETE", FUNNELS) == []
    body = request_json(backend.last("PATCH", FUNNELS))
    assert body["active"] is False


@pytest.mark.asyncio
async def test_get_categories_sorted_by_name(store, backend):
    """Test categories are ordered by name"""
    backend.add("GET", CATEGORIES, [{"id": "c-1", "name": "Coaching"}, {"id": "c-2", "name": "Ecommerce"}])

    categories = await FunnelService(store).get_categories()

    assert [c.name for c in categories] == ["Coaching", "Ecommerce"]
    assert backend.last("GET", CATEGORIES).url.params["order"] == "name.asc"


@pytest.mark.asyncio
async def test_upload_funnel_image_returns_public_url(store, backend):
    """Test uploads land under the image folder and return a public URL"""
    backend.add("POST", "/storage/v1/object/funnels/funnel-images/*", {"Key": "stored"})

    url = await FunnelService(store, "funnels", "funnel-images").upload_funnel_image(
        "hero.png", b"img", "image/png"
    )

    sent = backend.last("POST", "/storage/v1/object/funnels/funnel-images/*")
    assert re.fullmatch(r"/storage/v1/object/funnels/funnel-images/[0-9a-f]{32}\.png", sent.url.path)
    assert sent.content == b"img"
    assert url == "http://backend.test" + sent.url.path.replace("/object/", "/object/public/", 1)


@pytest.mark.asyncio
async def test_upload_funnel_image_failure_returns_none(store, backend):
    """Test a rejected upload returns None"""
    backend.fail("POST", "/storage/v1/object/funnels/funnel-images/*", "Bucket not found", status_code=404)

    assert await FunnelService(store).upload_funnel_image("hero.png", b"img", "image/png") is None
