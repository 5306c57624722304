"""HTTP dispatcher used by the client-side forms.

One request per call, JSON in and out. Non-2xx responses raise ``ApiError``
whose string form is ``"<status>: <message>"``; network failures surface as
the underlying ``httpx`` exception.
"""
from typing import Any

import httpx

DEFAULT_TIMEOUT = 90.0
_MESSAGE_KEYS = ("message", "detail", "error")


class ApiError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


def error_message(response: httpx.Response) -> str:
    text = response.text.strip()
    if not text:
        return response.reason_phrase or "Request failed"
    try:
        body = response.json()
    except ValueError:
        return text
    if isinstance(body, dict):
        for key in _MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return text


def _request_kwargs(data: Any, headers: dict[str, str] | None) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"headers": dict(headers or {})}
    if data is not None:
        kwargs["json"] = data
    return kwargs


def parse_response(response: httpx.Response) -> Any:
    if response.is_error:
        raise ApiError(response.status_code, error_message(response))
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def api_request(
    method: str,
    url: str,
    data: Any = None,
    *,
    client: httpx.Client | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    kwargs = _request_kwargs(data, headers)
    if client is not None:
        return parse_response(client.request(method, url, **kwargs))
    with httpx.Client(timeout=DEFAULT_TIMEOUT) as owned:
        return parse_response(owned.request(method, url, **kwargs))


async def async_api_request(
    method: str,
    url: str,
    data: Any = None,
    *,
    client: httpx.AsyncClient | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    kwargs = _request_kwargs(data, headers)
    if client is not None:
        return parse_response(await client.request(method, url, **kwargs))
    async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as owned:
        return parse_response(await owned.request(method, url, **kwargs))


class ApiClient:
    """Binds a base URL, the caller's user id and an optional transport."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        *,
        user_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self.transport = transport
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {"X-User-Id": self.user_id} if self.user_id else {}

    async def request(self, method: str, path: str, data: Any = None) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            transport=self.transport,
            timeout=self.timeout,
        ) as client:
            return await async_api_request(method, path, data, client=client, headers=self._headers())

    async def post(self, path: str, data: Any = None) -> Any:
        return await self.request("POST", path, data)

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
