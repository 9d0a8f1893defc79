"""Fake backend and row builders shared by the tests"""
import json
from typing import Any, Dict, List, Optional, Tuple

import httpx

BACKEND_URL = "http://backend.test"
ANON_KEY = "anon-key"
CREATED_AT = "2025-08-01T12:00:00+00:00"
UPDATED_AT = "2025-08-02T12:00:00+00:00"

Body = Any
Route = Tuple[int, Body, Dict[str, str], Optional[Exception]]


class FakeBackend:
    """Stands in for the hosted backend behind an ``httpx.MockTransport``.

    Routes are keyed by method and path; unknown routes answer 404 with a
    store-style error body. Every request is recorded.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        body: Body = None,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.routes[(method.upper(), path)] = (status_code, body, headers or {}, None)

    def fail(self, method: str, path: str, message: str = "backend exploded", status_code: int = 400) -> None:
        self.add(method, path, {"message": message, "code": "P0001", "details": None, "hint": None}, status_code)

    def disconnect(self, method: str, path: str) -> None:
        self.routes[(method.upper(), path)] = (0, None, {}, httpx.ConnectError("connection refused"))

    def _match(self, method: str, path: str) -> Optional[Route]:
        route = self.routes.get((method, path))
        if route is not None:
            return route
        # Paths ending in "/*" match by prefix
        for (route_method, route_path), candidate in self.routes.items():
            if route_method == method and route_path.endswith("/*") and path.startswith(route_path[:-1]):
                return candidate
        return None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._match(request.method, request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.method} {request.url.path}"})

        status_code, body, headers, error = route
        if error is not None:
            raise error
        if callable(body):
            body = body(request)
        if body is None:
            return httpx.Response(status_code, headers=headers)
        return httpx.Response(status_code, json=body, headers=headers)

    def sent(self, method: str, path: str) -> List[httpx.Request]:
        if path.endswith("/*"):
            return [r for r in self.requests if r.method == method.upper() and r.url.path.startswith(path[:-1])]
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]

    def last(self, method: str, path: str) -> httpx.Request:
        matches = self.sent(method, path)
        assert matches, f"No {method} request sent to {path}"
        return matches[-1]


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


def make_row(**fields) -> Dict[str, Any]:
    row = {"created_at": CREATED_AT, "updated_at": UPDATED_AT}
    row.update(fields)
    return row

