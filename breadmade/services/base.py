"""Shared helpers for services backed by the remote store"""
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel

from breadmade.core.database import RemoteStore

ModelT = TypeVar("ModelT", bound=BaseModel)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def current_quarter(now: Optional[datetime] = None) -> str:
    """Quarter label such as ``Q3 2025``"""
    now = now or utc_now()
    quarter = (now.month + 2) // 3
    return f"Q{quarter} {now.year}"


def parse_row(model: Type[ModelT], row: Any) -> ModelT:
    """Validate one remote row into its model (ISO timestamps become datetimes)"""
    return model.model_validate(row)


def parse_rows(model: Type[ModelT], rows: Optional[Iterable[Any]]) -> List[ModelT]:
    return [model.model_validate(row) for row in rows or []]


class BaseService:
    """Base class holding the remote store handle"""

    def __init__(self, store: RemoteStore):
        self.store = store
