"""Async client for the hosted tabular store, RPC functions and object storage"""
import copy
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote

import httpx

from breadmade.core.config import Settings
from breadmade.core.exceptions import RemoteStoreError

SINGLE_OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"
_RESERVED_CHARS = set(',()". ')


def format_filter_value(value: Any) -> str:
    """Render a Python value the way the store expects it in a filter"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _quote_list_item(value: Any) -> str:
    text = format_filter_value(value)
    if any(ch in _RESERVED_CHARS for ch in text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def parse_content_range(header: Optional[str]) -> Optional[int]:
    """Extract the total from a ``Content-Range`` header (``0-9/42`` or ``*/42``)"""
    if not header or "/" not in header:
        return None
    total = header.split("/", 1)[1]
    if total == "*":
        return None
    try:
        return int(total)
    except ValueError:
        return None


class QueryResult:
    """Outcome of a successful query"""

    def __init__(self, data: Any, count: Optional[int] = None):
        self.data = data
        self.count = count

    def __repr__(self):
        return f"<QueryResult count={self.count} data={self.data!r}>"


class QueryBuilder:
    """Chainable request against one table.

    Filters and modifiers return the builder so calls read like
    ``store.table("leads").select("*").eq("id", lead_id).single()``.
    Nothing is sent until :meth:`execute` is awaited.
    """

    def __init__(self, store: "RemoteStore", table: str):
        self._store = store
        self._table = table
        self._method: Optional[str] = None
        self._params: List[Tuple[str, str]] = []
        self._body: Any = None
        self._prefer: List[str] = []
        self._single = False
        self._head = False

    # Operations

    def select(self, columns: str = "*", count: Optional[str] = None, head: bool = False) -> "QueryBuilder":
        """Select columns; after insert/update this selects the returned representation"""
        if self._method is None:
            self._method = "HEAD" if head else "GET"
            self._head = head
        cleaned = "".join(part.strip() for part in columns.splitlines())
        self._params.append(("select", cleaned.replace(" ", "")))
        if count:
            self._prefer.append(f"count={count}")
        return self

    def insert(self, rows: Any) -> "QueryBuilder":
        self._method = "POST"
        self._body = rows if isinstance(rows, list) else [rows]
        self._prefer.append("return=representation")
        return self

    def update(self, values: Dict[str, Any]) -> "QueryBuilder":
        self._method = "PATCH"
        self._body = values
        self._prefer.append("return=representation")
        return self

    def delete(self) -> "QueryBuilder":
        self._method = "DELETE"
        self._prefer.append("return=minimal")
        return self

    # Filters

    def _filter(self, column: str, operator: str, value: Any) -> "QueryBuilder":
        self._params.append((column, f"{operator}.{format_filter_value(value)}"))
        return self

    def eq(self, column: str, value: Any) -> "QueryBuilder":
        return self._filter(column, "eq", value)

    def gte(self, column: str, value: Any) -> "QueryBuilder":
        return self._filter(column, "gte", value)

    def lte(self, column: str, value: Any) -> "QueryBuilder":
        return self._filter(column, "lte", value)

    def not_(self, column: str, operator: str, value: Any) -> "QueryBuilder":
        return self._filter(column, f"not.{operator}", value)

    def in_(self, column: str, values: Iterable[Any]) -> "QueryBuilder":
        items = ",".join(_quote_list_item(v) for v in values)
        self._params.append((column, f"in.({items})"))
        return self

    def or_(self, filters: str) -> "QueryBuilder":
        """Raw disjunction, e.g. ``"email.ilike.*x*,name.ilike.*x*"``"""
        self._params.append(("or", f"({filters})"))
        return self

    # Modifiers

    def order(self, column: str, desc: bool = False) -> "QueryBuilder":
        self._params.append(("order", f"{column}.{'desc' if desc else 'asc'}"))
        return self

    def limit(self, count: int) -> "QueryBuilder":
        self._params.append(("limit", str(count)))
        return self

    def single(self) -> "QueryBuilder":
        """Expect exactly one row; zero or several rows is an error"""
        self._single = True
        return self

    async def execute(self) -> QueryResult:
        method = self._method or "GET"
        headers: Dict[str, str] = {}
        if self._prefer:
            headers["Prefer"] = ",".join(self._prefer)
        if self._single:
            headers["Accept"] = SINGLE_OBJECT_MEDIA_TYPE

        response = await self._store.request(
            method,
            f"{self._store.rest_url}/{self._table}",
            params=self._params,
            json=self._body,
            headers=headers,
        )

        count = parse_content_range(response.headers.get("content-range"))
        if self._head or response.status_code == 204 or not response.content:
            return QueryResult(data=None, count=count)
        return QueryResult(data=response.json(), count=count)


class StorageBucket:
    """Object storage operations for a single bucket"""

    def __init__(self, store: "RemoteStore", bucket: str):
        self._store = store
        self.bucket = bucket

    async def upload(self, path: str, content: bytes, content_type: str = "application/octet-stream") -> str:
        """Upload an object and return its storage key"""
        url = f"{self._store.storage_url}/object/{self.bucket}/{quote(path)}"
        response = await self._store.request(
            "POST",
            url,
            content=content,
            headers={"Content-Type": content_type},
        )
        payload = response.json() if response.content else {}
        return payload.get("Key") or f"{self.bucket}/{path}"

    def get_public_url(self, path: str) -> str:
        return f"{self._store.storage_url}/object/public/{self.bucket}/{quote(path)}"


class RemoteStore:
    """Thin HTTP client for the hosted backend's REST, RPC and storage endpoints"""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.rest_url = settings.rest_url
        self.storage_url = settings.storage_url
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)
        self._access_token: Optional[str] = None

    def with_access_token(self, token: Optional[str]) -> "RemoteStore":
        """
        View of this store that sends requests as the given user

        The view shares the HTTP client and never closes it; ``None`` falls
        back to the public key.
        """
        view = copy.copy(self)
        view._access_token = token
        view._owns_client = False
        return view

    def _base_headers(self) -> Dict[str, str]:
        return {
            "apikey": self.settings.SUPABASE_ANON_KEY,
            "Authorization": f"Bearer {self._access_token or self.settings.SUPABASE_ANON_KEY}",
        }

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request and raise :class:`RemoteStoreError` on any failure"""
        headers = self._base_headers()
        headers.update(kwargs.pop("headers", None) or {})
        if kwargs.get("json") is None:
            kwargs.pop("json", None)

        try:
            response = await self.client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"Network error: {e}") from e

        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise RemoteStoreError.from_payload(payload, response.status_code)

        return response

    def table(self, name: str) -> QueryBuilder:
        return QueryBuilder(self, name)

    async def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Call a remote procedure and return its decoded JSON result"""
        response = await self.request(
            "POST",
            f"{self.rest_url}/rpc/{function}",
            json=params or {},
        )
        if not response.content:
            return None
        return response.json()

    def storage(self, bucket: str) -> StorageBucket:
        return StorageBucket(self, bucket)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
