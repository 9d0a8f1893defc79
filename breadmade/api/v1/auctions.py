"""Auction, bid and countdown API endpoints"""
import asyncio
from contextlib import suppress
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from starlette.websockets import WebSocketState

from breadmade.api.deps import get_auction_service, get_current_user, require_admin_user
from breadmade.models.auction import Auction, Bid
from breadmade.models.user import User
from breadmade.schemas.auction import (
    AuctionCreate,
    AuctionUpdate,
    BidCreate,
    BidPlace,
    BidResponse,
    BidUpdate,
    CountdownSnapshot,
)
from breadmade.services.auction_service import AuctionService
from breadmade.services.countdown import (
    CountdownTimer,
    TimeRemaining,
    calculate_time_remaining,
    format_time_remaining,
)
from breadmade.utils.logger import logger

router = APIRouter()


def _snapshot(auction_id: str, ends_at: datetime, remaining: TimeRemaining) -> CountdownSnapshot:
    return CountdownSnapshot(
        auction_id=auction_id,
        ends_at=ends_at,
        display=format_time_remaining(remaining),
        **remaining.model_dump(),
    )


@router.get("/auctions", response_model=List[Auction])
async def list_auctions(service: AuctionService = Depends(get_auction_service)):
    """Auctions ending soonest first"""
    return await service.get_auctions()


@router.get("/auctions/{auction_id}", response_model=Auction)
async def get_auction(auction_id: str, service: AuctionService = Depends(get_auction_service)):
    auction = await service.get_auction_by_id(auction_id)
    if not auction:
        raise HTTPException(status_code=404, detail="Auction not found")
    return auction


@router.post("/auctions", response_model=Auction, status_code=201, dependencies=[Depends(require_admin_user)])
async def create_auction(auction_data: AuctionCreate, service: AuctionService = Depends(get_auction_service)):
    """
    Create an auction

    - **starting_price**: Opening price
    - **starts_at** / **ends_at**: Auction window
    - **status**: Defaults to draft
    """
    return await service.create_auction(auction_data)


@router.patch("/auctions/{auction_id}", response_model=Auction, dependencies=[Depends(require_admin_user)])
async def update_auction(
    auction_id: str,
    updates: AuctionUpdate,
    service: AuctionService = Depends(get_auction_service),
):
    return await service.update_auction(auction_id, updates)


@router.delete("/auctions/{auction_id}", status_code=204, dependencies=[Depends(require_admin_user)])
async def delete_auction(auction_id: str, service: AuctionService = Depends(get_auction_service)):
    await service.delete_auction(auction_id)


@router.get("/auctions/{auction_id}/bids", response_model=List[Bid])
async def list_auction_bids(auction_id: str, service: AuctionService = Depends(get_auction_service)):
    """Bids on an auction, highest first, with bidder names"""
    return await service.get_bids_by_auction(auction_id)


def _refused(response: BidResponse) -> JSONResponse:
    return JSONResponse(status_code=400, content=response.model_dump(mode="json"))


@router.post("/auctions/{auction_id}/bids", response_model=BidResponse, status_code=201)
async def place_bid(
    auction_id: str,
    bid_data: BidPlace,
    user: User = Depends(get_current_user),
    service: AuctionService = Depends(get_auction_service),
):
    """
    Bid on an active auction as the signed-in user

    Refused bids answer 400 with ``success: false`` and the reason.
    """
    bid = BidCreate(auction_id=auction_id, bidder_id=user.id, **bid_data.model_dump())
    response = await service.place_bid(bid)
    if not response.success:
        return _refused(response)
    return response


@router.post("/auctions/{auction_id}/buy-now", response_model=BidResponse)
async def buy_now(
    auction_id: str,
    user: User = Depends(get_current_user),
    service: AuctionService = Depends(get_auction_service),
):
    """Buy an active auction outright at its buy-now price"""
    response = await service.buy_now(auction_id, user.id)
    if not response.success:
        return _refused(response)
    return response


@router.get("/auctions/{auction_id}/countdown", response_model=CountdownSnapshot)
async def get_countdown(auction_id: str, service: AuctionService = Depends(get_auction_service)):
    """Time left on an auction right now"""
    auction = await service.get_auction_by_id(auction_id)
    if not auction:
        raise HTTPException(status_code=404, detail="Auction not found")
    return _snapshot(auction.id, auction.ends_at, calculate_time_remaining(auction.ends_at))


@router.get("/bids/me", response_model=List[Bid])
async def my_bids(
    user: User = Depends(get_current_user),
    service: AuctionService = Depends(get_auction_service),
):
    return await service.get_user_bids(user.id)


@router.get("/bids", response_model=List[Bid], dependencies=[Depends(require_admin_user)])
async def list_bids(service: AuctionService = Depends(get_auction_service)):
    return await service.get_bids()


@router.get("/bids/{bid_id}", response_model=Bid, dependencies=[Depends(require_admin_user)])
async def get_bid(bid_id: str, service: AuctionService = Depends(get_auction_service)):
    bid = await service.get_bid_by_id(bid_id)
    if not bid:
        raise HTTPException(status_code=404, detail="Bid not found")
    return bid


@router.patch("/bids/{bid_id}", response_model=Bid, dependencies=[Depends(require_admin_user)])
async def update_bid(
    bid_id: str,
    updates: BidUpdate,
    service: AuctionService = Depends(get_auction_service),
):
    return await service.update_bid(bid_id, updates)


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        return


@router.websocket("/auctions/{auction_id}/countdown/ws")
async def countdown_socket(websocket: WebSocket, auction_id: str):
    """
    Stream the auction countdown

    One snapshot per tick while the auction runs, then a final expired
    snapshot before the socket is closed. The timer is stopped as soon as
    the client goes away.
    """
    service = AuctionService(websocket.app.state.store)
    auction = await service.get_auction_by_id(auction_id)
    await websocket.accept()
    if not auction:
        await websocket.send_json({"type": "error", "message": "Auction not found"})
        await websocket.close(code=4404)
        return

    async def on_tick(remaining: TimeRemaining) -> None:
        await websocket.send_json(_snapshot(auction.id, auction.ends_at, remaining).model_dump(mode="json"))

    async def on_expire() -> None:
        await on_tick(TimeRemaining(expired=True))

    timer = CountdownTimer(
        auction.ends_at,
        on_expire=on_expire,
        on_tick=on_tick,
        interval=websocket.app.state.settings.COUNTDOWN_INTERVAL_SECONDS,
    )
    timer_task = timer.start()
    listener = asyncio.create_task(_wait_for_disconnect(websocket))
    try:
        await asyncio.wait({timer_task, listener}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        timer.stop()
        listener.cancel()

    if timer_task.done() and not timer_task.cancelled() and timer_task.exception():
        logger.warning(f"Countdown for auction {auction_id} stopped: {timer_task.exception()}")
    if listener.done() and not listener.cancelled():
        logger.debug(f"Countdown client left auction {auction_id}")
        return
    if websocket.client_state != WebSocketState.DISCONNECTED:
        with suppress(RuntimeError):
            await websocket.close()
