"""Unit tests for the remote store client"""
from datetime import datetime, timezone

import pytest

from breadmade.core.database import format_filter_value, parse_content_range
from breadmade.core.exceptions import RemoteStoreError
from tests.helpers import ANON_KEY, request_json


def test_format_filter_value():
    """Test Python values render the way filters expect"""
    assert format_filter_value(None) == "null"
    assert format_filter_value(True) == "true"
    assert format_filter_value(False) == "false"
    assert format_filter_value(12.5) == "12.5"
    moment = datetime(2025, 8, 1, 12, 0, tzinfo=timezone.utc)
    assert format_filter_value(moment) == "2025-08-01T12:00:00+00:00"


def test_parse_content_range():
    """Test totals are read from Content-Range headers"""
    assert parse_content_range("0-9/42") == 42
    assert parse_content_range("*/7") == 7
    assert parse_content_range("0-9/*") is None
    assert parse_content_range(None) is None


@pytest.mark.asyncio
async def test_select_with_filters_and_modifiers(store, backend):
    """Test filters, ordering and limit end up in the query string"""
    backend.add("GET", "/rest/v1/purchases", [])

    await (
        store.table("purchases")
        .select("id, amount")
        .eq("payment_status", "completed")
        .gte("amount", 100)
        .in_("type", ["stripe", "paypal"])
        .order("created_at", desc=True)
        .limit(5)
        .execute()
    )

    params = backend.last("GET", "/rest/v1/purchases").url.params
    assert params["select"] == "id,amount"
    assert params["payment_status"] == "eq.completed"
    assert params["amount"] == "gte.100"
    assert params["type"] == "in.(stripe,paypal)"
    assert params["order"] == "created_at.desc"
    assert params["limit"] == "5"


@pytest.mark.asyncio
async def test_token_view_leaves_shared_store_anonymous(store, backend):
    """Test a token view sends the user token while the shared store keeps the public key"""
    backend.add("GET", "/rest/v1/leads", [])

    await store.table("leads").select().execute()
    first = backend.last("GET", "/rest/v1/leads")
    assert first.headers["apikey"] == ANON_KEY
    assert first.headers["Authorization"] == f"Bearer {ANON_KEY}"

    user_store = store.with_access_token("user-token")
    await user_store.table("leads").select().execute()
    assert backend.last("GET", "/rest/v1/leads").headers["Authorization"] == "Bearer user-token"
    assert user_store.client is store.client

    await store.table("leads").select().execute()
    assert backend.last("GET", "/rest/v1/leads").headers["Authorization"] == f"Bearer {ANON_KEY}"


@pytest.mark.asyncio
async def test_count_reads_content_range(store, backend):
    """Test exact counts come from the Content-Range header"""
    backend.add("HEAD", "/rest/v1/leads", None, headers={"Content-Range": "*/12"})

    result = await store.table("leads").select("id", count="exact", head=True).execute()

    assert result.count == 12
    assert result.data is None
    assert "count=exact" in backend.last("HEAD", "/rest/v1/leads").headers["Prefer"]


@pytest.mark.asyncio
async def test_error_body_becomes_remote_store_error(store, backend):
    """Test JSON error bodies are decoded into RemoteStoreError"""
    backend.add("GET", "/rest/v1/leads", {
        "message": "relation does not exist",
        "code": "42P01",
        "details": "leads",
        "hint": "check the table name",
    }, status_code=404)

    with pytest.raises(RemoteStoreError) as exc_info:
        await store.table("leads").select().execute()

    error = exc_info.value
    assert error.message == "relation does not exist"
    assert error.code == "42P01"
    assert error.hint == "check the table name"
    assert error.status_code == 404


@pytest.mark.asyncio
async def test_rpc_posts_params(store, backend):
    """Test remote procedures are called with a JSON body"""
    backend.add("POST", "/rest/v1/rpc/search_users", [{"id": "u1"}])

    result = await store.rpc("search_users", {"search_query": "jane"})

    assert result == [{"id": "u1"}]
    assert request_json(backend.last("POST", "/rest/v1/rpc/search_users")) == {"search_query": "jane"}


@pytest.mark.asyncio
async def test_storage_upload_and_public_url(store, backend):
    """Test uploads go to the bucket path and public URLs point at it"""
    backend.add("POST", "/storage/v1/object/funnels/funnel-images/a.png", {"Key": "funnels/funnel-images/a.png"})
    bucket = store.storage("funnels")

    key = await bucket.upload("funnel-images/a.png", b"png-bytes", "image/png")

    assert key == "funnels/funnel-images/a.png"
    sent = backend.last("POST", "/storage/v1/object/funnels/funnel-images/a.png")
    assert sent.content == b"png-bytes"
    assert sent.headers["Content-Type"] == "image/png"
    assert bucket.get_public_url("funnel-images/a.png") == (
        "http://backend.test/storage/v1/object/public/funnels/funnel-images/a.png"
    )
