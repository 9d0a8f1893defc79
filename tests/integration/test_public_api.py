"""Integration tests for public and signed-in user endpoints"""
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from tests.helpers import make_row, request_json


@pytest.mark.asyncio
async def test_create_lead(client: AsyncClient, backend):
    """Test the public lead form"""
    backend.add("POST", "/rest/v1/leads", make_row(id="lead-1", email="jane@example.com"), status_code=201)

    response = await client.post("/api/v1/leads", json={"email": "jane@example.com"})

    assert response.status_code == 201
    assert response.json()["id"] == "lead-1"


@pytest.mark.asyncio
async def test_create_lead_failure_returns_400(client: AsyncClient, backend):
    """Test write failures are answered with the remote message"""
    backend.fail("POST", "/rest/v1/leads", "duplicate key value violates unique constraint", status_code=409)

    response = await client.post("/api/v1/leads", json={"email": "jane@example.com"})

    assert response.status_code == 400
    assert response.json()["detail"] == (
        "Failed to create lead: duplicate key value violates unique constraint"
    )


@pytest.mark.asyncio
async def test_list_funnels(client: AsyncClient, backend):
    """Test public funnel listing"""
    backend.add("GET", "/rest/v1/funnels", [make_row(id="f-1", funnel_id="sales-page-abc", title="Sales Page")])

    response = await client.get("/api/v1/funnels")

    assert response.status_code == 200
    assert response.json()[0]["funnel_id"] == "sales-page-abc"


@pytest.mark.asyncio
async def test_funnel_not_found(client: AsyncClient, backend):
    """Test a missing funnel answers 404"""
    backend.fail("GET", "/rest/v1/funnels", "no rows", status_code=406)

    response = await client.get("/api/v1/funnels/slug/missing")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_countdown_snapshot(client: AsyncClient, backend):
    """Test the countdown of an ended auction"""
    backend.add("GET", "/rest/v1/auctions", make_row(
        id="auc-1",
        status="ended",
        starting_price=100,
        starts_at="2025-01-01T00:00:00+00:00",
        ends_at="2025-01-02T00:00:00+00:00",
    ))
    backend.add("GET", "/rest/v1/bids", [])

    response = await client.get("/api/v1/auctions/auc-1/countdown")

    assert response.status_code == 200
    data = response.json()
    assert data["expired"] is True
    assert data["display"] == "Auction Ended"


def running_auction(**fields):
    row = {
        "id": "auc-1",
        "status": "active",
        "starting_price": 500,
        "starts_at": "2025-01-01T00:00:00+00:00",
        "ends_at": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
    }
    row.update(fields)
    return make_row(**row)


@pytest.mark.asyncio
async def test_place_bid_uses_signed_in_user(client: AsyncClient, backend, sign_in, regular_user):
    """Test bids are placed for the signed-in user"""
    sign_in(regular_user)
    backend.add("GET", "/rest/v1/auctions", running_auction())
    backend.add("GET", "/rest/v1/bids", [])
    backend.add("POST", "/rest/v1/bids", make_row(id="bid-1", auction_id="auc-1", bidder_id="user-1", amount=600),
                status_code=201)

    response = await client.post("/api/v1/auctions/auc-1/bids", json={"amount": 600})

    assert response.status_code == 201
    assert response.json()["success"] is True
    assert response.json()["bid"]["id"] == "bid-1"
    body = request_json(backend.last("POST", "/rest/v1/bids"))[0]
    assert body["bidder_id"] == "user-1"
    assert body["auction_id"] == "auc-1"


@pytest.mark.asyncio
async def test_low_bid_returns_400(client: AsyncClient, backend, sign_in, regular_user):
    """Test a refused bid answers 400 with the reason"""
    sign_in(regular_user)
    backend.add("GET", "/rest/v1/auctions", running_auction(current_price=800))
    backend.add("GET", "/rest/v1/bids", [])

    response = await client.post("/api/v1/auctions/auc-1/bids", json={"amount": 600})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["error"] == "Bid must be higher than current price of $800"
    assert backend.sent("POST", "/rest/v1/bids") == []


@pytest.mark.asyncio
async def test_buy_now(client: AsyncClient, backend, sign_in, regular_user):
    """Test buying outright as the signed-in user"""
    sign_in(regular_user)
    backend.add("GET", "/rest/v1/auctions", running_auction(buy_now=1200))
    backend.add("GET", "/rest/v1/bids", [])
    backend.add("PATCH", "/rest/v1/auctions", running_auction(status="sold", buy_now=1200, winner_id="user-1"))

    response = await client.post("/api/v1/auctions/auc-1/buy-now")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert request_json(backend.last("PATCH", "/rest/v1/auctions"))["winner_id"] == "user-1"


@pytest.mark.asyncio
async def test_buy_now_without_price_returns_400(client: AsyncClient, backend, sign_in, regular_user):
    """Test buy-now on an auction without a buy-now price answers 400"""
    sign_in(regular_user)
    backend.add("GET", "/rest/v1/auctions", running_auction())
    backend.add("GET", "/rest/v1/bids", [])

    response = await client.post("/api/v1/auctions/auc-1/buy-now")

    assert response.status_code == 400
    assert response.json()["error"] == "Buy now option not available"


@pytest.mark.asyncio
async def test_place_bid_requires_sign_in(client: AsyncClient):
    """Test anonymous bids are rejected"""
    response = await client.post("/api/v1/auctions/auc-1/bids", json={"amount": 600})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_draft_lease_request(client: AsyncClient, backend):
    """Test the first lease form step is public"""
    backend.add("POST", "/rest/v1/lease_requests", make_row(
        id="lease-1",
        name="Anonymous",
        email="jane@example.com",
        project_type="TBD",
        industry="TBD",
        primary_goal="TBD",
    ), status_code=201)

    response = await client.post("/api/v1/lease-requests/draft", json={"email": "jane@example.com"})

    assert response.status_code == 201
    assert response.json()["project_type"] == "TBD"


@pytest.mark.asyncio
async def test_setup_intent(client: AsyncClient, backend, sign_in, regular_user):
    """Test payment responses keep the camelCase envelope"""
    sign_in(regular_user)
    backend.add("POST", "/functions/v1/create-setup-intent", {
        "success": True,
        "setupIntent": {"id": "seti_123"},
    })

    response = await client.post("/api/v1/payments/setup-intent", json={
        "auctionId": "auc-1",
        "buyerId": "user-1",
    })

    assert response.status_code == 200
    assert response.json()["setupIntent"] == {"id": "seti_123"}


@pytest.mark.asyncio
async def test_payments_require_sign_in(client: AsyncClient):
    """Test payment routes are closed to anonymous callers"""
    response = await client.post("/api/v1/payments/setup-intent", json={
        "auctionId": "auc-1",
        "buyerId": "user-1",
    })

    assert response.status_code == 401
