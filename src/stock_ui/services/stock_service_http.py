"""
HTTP implementation of StockService.

Talks to the stock back end with a ``requests.Session``. The session's
default headers hold the bearer token, so installing the credential once
affects every subsequent request made through this service.

requests is blocking, so each call is pushed onto a worker thread with
``asyncio.to_thread``; the event loop never waits on the network.

Response bodies are wrapped in benedict for keypath access to the
pagination envelope (``metadata.total_pages``) and error bodies.
"""

import asyncio
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import requests
from benedict import benedict

from stock_ui import config
from stock_ui.errors import AuthError, NetworkError, NotFoundError, RemoteError
from stock_ui.lib import logs
from stock_ui.models.common import ListMetadata, ListResult
from stock_ui.models.stock import (
    Client,
    ClientStockLine,
    Product,
    User,
    parse_client,
    parse_product,
    parse_stock_line,
    parse_user,
)
from stock_ui.services.stock_service import StockService
from stock_ui.utils import matches_query, page_slice

LOG = logs.logger(__file__)

_AUTHORIZATION = "Authorization"


def _parse_metadata(b: benedict, page: int, limit: int, count: int) -> ListMetadata:
    """Read the pagination envelope, falling back to the request values."""
    return ListMetadata(
        total_records=int(b.get("metadata.total_records", count)),
        current_page=int(b.get("metadata.current_page", page)),
        page_size=int(b.get("metadata.page_size", limit)),
        total_pages=int(b.get("metadata.total_pages", 1 if count else 0)),
    )


@contextmanager
def _decoding(what: str, status_code: int = 200) -> Iterator[None]:
    """Turn a body that does not have the expected shape into a RemoteError."""
    try:
        yield
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        LOG.warning("Malformed %s in response: %r", what, e)
        raise RemoteError(f"Malformed {what} in response", status_code) from e


def _error_message(response: requests.Response) -> tuple[str, str | None]:
    """Extract ``(message, code)`` from an error response."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or response.reason or "Request failed"), None
    if not isinstance(body, dict):
        return str(body), None
    b = benedict(body)
    code = b.get("error")
    message = b.get("message") or code or response.reason or "Request failed"
    return message, code


class HttpStockService(StockService):
    """
    Stock service backed by the REST API.

    Attributes:
        base_url: Root URL of the back end, without trailing slash.
        timeout: Per request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT
        self._session = session or requests.Session()

    @property
    def credential(self) -> str | None:
        header = self._session.headers.get(_AUTHORIZATION)
        if not header:
            return None
        return header.removeprefix("Bearer ")

    def set_credential(self, token: str) -> None:
        self._session.headers[_AUTHORIZATION] = f"Bearer {token}"

    def clear_credential(self) -> None:
        self._session.headers.pop(_AUTHORIZATION, None)

    def close(self) -> None:
        self._session.close()

    def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
    ) -> Any:
        """
        Perform one blocking request and decode the JSON body.

        Raises:
            NetworkError: On connection failures and timeouts.
            AuthError: On HTTP 401.
            NotFoundError: On HTTP 404.
            RemoteError: On any other non-success status.
        """
        url = f"{self.base_url}{path}"
        LOG.debug("%s %s params:%s", method, url, params)
        try:
            response = self._session.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            LOG.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(f"Could not reach the server: {e}") from e

        if not response.ok:
            message, code = _error_message(response)
            LOG.info("%s %s -> %s %s", method, url, response.status_code, message)
            if response.status_code == 401:
                raise AuthError(message)
            if response.status_code == 404:
                raise NotFoundError(message, response.status_code, code)
            raise RemoteError(message, response.status_code, code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError("Malformed response body", response.status_code) from e

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        return await asyncio.to_thread(self._request, method, path, **kwargs)

    async def login(self, email: str, password: str) -> str:
        try:
            body = await self._call(
                "POST", "/login", json={"email": email, "password": password}
            )
        except RemoteError as e:
            if e.status_code in (400, 403):
                raise AuthError(e.message) from e
            raise
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise AuthError("Login response did not include a token")
        return token

    async def register(self, email: str, password: str, password_confirm: str) -> None:
        await self._call(
            "POST",
            "/register",
            json={
                "email": email,
                "password": password,
                "passwordConfirm": password_confirm,
            },
        )

    async def me(self) -> User:
        body = await self._call("GET", "/me")
        with _decoding("user"):
            return parse_user(body)

    async def list_products(
        self, page: int = 1, limit: int = 10, search: str = ""
    ) -> ListResult[Product]:
        body = await self._call(
            "GET",
            "/products",
            params={"page": page, "limit": limit, "search": search},
        )
        with _decoding("product page"):
            b = benedict(body or {})
            items = [parse_product(item) for item in b.get("data") or []]
            return ListResult.of(items, _parse_metadata(b, page, limit, len(items)))

    async def create_product(self, payload: dict) -> Product:
        body = await self._call("POST", "/products", json=payload)
        with _decoding("product"):
            return parse_product(body)

    async def update_product(self, product_id: str, payload: dict) -> Product:
        body = await self._call("PUT", f"/products/{product_id}", json=payload)
        with _decoding("product"):
            return parse_product(body)

    async def delete_product(self, product_id: str) -> None:
        await self._call("DELETE", f"/products/{product_id}")

    async def transfer_stock(self, product_id: str, client_id: str, quantity: int) -> None:
        await self._call(
            "POST",
            f"/products/{product_id}/transfer",
            json={"clientId": client_id, "quantity": quantity},
        )

    async def list_clients(
        self, page: int = 1, limit: int = 10, search: str = ""
    ) -> ListResult[Client]:
        body = await self._call(
            "GET",
            "/clients",
            params={"page": page, "limit": limit, "search": search},
        )
        if isinstance(body, list) or body is None:
            # Unpaginated back end: filter and slice locally.
            with _decoding("client list"):
                clients = [parse_client(item) for item in body or []]
            matching = [c for c in clients if matches_query(c.name, search)]
            return ListResult.of(
                page_slice(matching, page, limit),
                ListMetadata.for_slice(len(matching), page, limit),
            )
        with _decoding("client page"):
            b = benedict(body)
            items = [parse_client(item) for item in b.get("data") or []]
            return ListResult.of(items, _parse_metadata(b, page, limit, len(items)))

    async def get_client(self, client_id: str) -> Client:
        body = await self._call("GET", f"/clients/{client_id}")
        with _decoding("client"):
            return parse_client(body)

    async def create_client(self, payload: dict) -> Client:
        body = await self._call("POST", "/clients", json=payload)
        with _decoding("client"):
            return parse_client(body)

    async def update_client(self, client_id: str, payload: dict) -> Client:
        body = await self._call("PUT", f"/clients/{client_id}", json=payload)
        with _decoding("client"):
            return parse_client(body)

    async def delete_client(self, client_id: str) -> None:
        await self._call("DELETE", f"/clients/{client_id}")

    async def list_client_stock(self, client_id: str) -> Sequence[ClientStockLine]:
        body = await self._call("GET", f"/clients/{client_id}/stock")
        with _decoding("client stock"):
            return [parse_stock_line(item) for item in body or []]
