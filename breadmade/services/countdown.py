"""Auction countdown"""
import asyncio
import inspect
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import BaseModel

from breadmade.services.base import utc_now
from breadmade.utils.logger import logger

SECONDS_PER_DAY = 86400
AUCTION_ENDED = "Auction Ended"


class TimeRemaining(BaseModel):
    """Whole days, hours, minutes and seconds left until an end time"""
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    expired: bool = False


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def calculate_time_remaining(end_time: datetime, now: Optional[datetime] = None) -> TimeRemaining:
    """
    Split the time left until ``end_time`` into days, hours, minutes and seconds

    Naive datetimes are taken as UTC. A non-positive difference is expired.
    """
    difference = (_aware(end_time) - _aware(now or utc_now())).total_seconds()
    if difference <= 0:
        return TimeRemaining(expired=True)

    total = int(difference)
    days, rest = divmod(total, SECONDS_PER_DAY)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return TimeRemaining(days=days, hours=hours, minutes=minutes, seconds=seconds)


def format_time_remaining(remaining: TimeRemaining) -> str:
    """Render as ``DDd HH:MM:SS``; the day part is left out when there are no days"""
    if remaining.expired:
        return AUCTION_ENDED
    clock = f"{remaining.hours:02d}:{remaining.minutes:02d}:{remaining.seconds:02d}"
    if remaining.days > 0:
        return f"{remaining.days:02d}d {clock}"
    return clock


async def _call(callback: Optional[Callable[..., Any]], *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class CountdownTimer:
    """Ticks once per interval until the end time, then fires ``on_expire`` once.

    ``on_tick`` receives the current :class:`TimeRemaining` while the auction
    is running; the expired state is never reported as a tick. Callbacks may be
    plain functions or coroutines. The owner must call :meth:`stop` when it
    goes away.
    """

    def __init__(
        self,
        end_time: datetime,
        on_expire: Optional[Callable[[], Any]] = None,
        on_tick: Optional[Callable[[TimeRemaining], Any]] = None,
        interval: float = 1.0,
    ):
        self.end_time = end_time
        self.on_expire = on_expire
        self.on_tick = on_tick
        self.interval = interval
        self.state = TimeRemaining()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Compute the first state now and schedule the ticking task"""
        self.stop()
        self.state = calculate_time_remaining(self.end_time)
        self._task = asyncio.create_task(self._run())
        return self._task

    def stop(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        while not self.state.expired:
            try:
                await _call(self.on_tick, self.state)
            except Exception as e:
                logger.error(f"Countdown tick callback failed: {e}", exc_info=True)
            await asyncio.sleep(self.interval)
            self.state = calculate_time_remaining(self.end_time)

        logger.debug(f"Countdown reached {self.end_time.isoformat()}")
        await _call(self.on_expire)
