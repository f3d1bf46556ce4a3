"""
Per browser tab bundle of service, session and controllers.

Reflex state must stay serializable, so the live objects of a tab (the
StockService holding its credential, the SessionStore and the page
controllers) are kept here, keyed by the tab's client token. Tabs that
go quiet are evicted and their HTTP sessions closed.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable

from stock_ui import config
from stock_ui.controllers import (
    ClientSource,
    DetailController,
    ListController,
    ProductSource,
    TransferWorkflow,
)
from stock_ui.lib import logs
from stock_ui.lib.caches import DiskCache
from stock_ui.models.stock import Client, Product
from stock_ui.services import StockService, create_stock_service
from stock_ui.session import DiskTokenStorage, SessionStore

LOG = logs.logger(__file__)

_TOKEN_CACHE: DiskCache | None = None


def _token_cache() -> DiskCache:
    global _TOKEN_CACHE
    if _TOKEN_CACHE is None:
        _TOKEN_CACHE = DiskCache(config.CACHE_DIR)
    return _TOKEN_CACHE


@dataclass
class Workspace:
    """Everything one browser tab needs beyond its Reflex state."""

    service: StockService
    session: SessionStore
    products: ListController[Product] | None = None
    clients: ListController[Client] | None = None
    details: dict[str, tuple[DetailController, TransferWorkflow]] = field(
        default_factory=dict
    )

    def product_list(self) -> ListController[Product]:
        if self.products is None:
            self.products = ListController(
                ProductSource(self.service), on_auth_error=self.logout
            )
        return self.products

    def client_list(self) -> ListController[Client]:
        if self.clients is None:
            self.clients = ListController(
                ClientSource(self.service), on_auth_error=self.logout
            )
        return self.clients

    def client_detail(self, client_id: str) -> tuple[DetailController, TransferWorkflow]:
        """Return the controllers of the open detail page; only one is kept."""
        if client_id not in self.details:
            self.details.clear()
            detail = DetailController(self.service, client_id, on_auth_error=self.logout)
            self.details[client_id] = (detail, TransferWorkflow(detail))
        return self.details[client_id]

    def reset_pages(self) -> None:
        """Drop page controllers so the next visit starts from scratch."""
        for controller in (self.products, self.clients):
            if controller is not None:
                controller.close()
        self.products = None
        self.clients = None
        self.details.clear()

    def logout(self) -> None:
        """End the session and forget everything loaded under it."""
        self.session.logout()
        self.reset_pages()

    def close(self) -> None:
        self.reset_pages()
        self.service.close()


class WorkspaceRegistry:
    """
    Live workspaces keyed by Reflex client token.

    Entries idle for longer than ``idle_seconds`` are dropped on the next
    lookup, and at most ``limit`` are kept; the least recently used goes
    first. Evicted workspaces are closed. A tab that comes back after
    eviction gets a fresh workspace and restores its session from the
    durable token.

    Args:
        factory: Builds the workspace of a new tab from its browser id.
        limit: Maximum number of live workspaces.
        idle_seconds: Idle time after which a workspace is evicted.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        factory: Callable[[str], Workspace],
        limit: int = config.WORKSPACE_LIMIT,
        idle_seconds: float = config.WORKSPACE_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.factory = factory
        self.limit = max(limit, 1)
        self.idle_seconds = idle_seconds
        self.clock = clock
        self._entries: OrderedDict[str, tuple[Workspace, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, client_token: str) -> bool:
        return client_token in self._entries

    def get(self, client_token: str, browser_id: str) -> Workspace:
        now = self.clock()
        self._evict_idle(now)
        entry = self._entries.pop(client_token, None)
        if entry is None:
            workspace = self.factory(browser_id)
            LOG.debug("Created workspace for tab %s", client_token)
        else:
            workspace = entry[0]
        self._entries[client_token] = (workspace, now)
        while len(self._entries) > self.limit:
            token, (oldest, _) = self._entries.popitem(last=False)
            self._close(token, oldest, "limit reached")
        return workspace

    def _evict_idle(self, now: float) -> None:
        while self._entries:
            token, (workspace, last_used) = next(iter(self._entries.items()))
            if now - last_used <= self.idle_seconds:
                break
            del self._entries[token]
            self._close(token, workspace, "idle")

    def _close(self, token: str, workspace: Workspace, reason: str) -> None:
        LOG.debug("Evicting workspace for tab %s (%s)", token, reason)
        try:
            workspace.close()
        except Exception:
            LOG.exception("Failed to close workspace for tab %s", token)

    def clear(self) -> None:
        while self._entries:
            token, (workspace, _) = self._entries.popitem(last=False)
            self._close(token, workspace, "cleared")


def _new_workspace(browser_id: str) -> Workspace:
    service = create_stock_service()
    storage = DiskTokenStorage(_token_cache(), key=f"{config.TOKEN_KEY}:{browser_id}")
    return Workspace(service=service, session=SessionStore(service, storage))


_WORKSPACES = WorkspaceRegistry(_new_workspace)


def get_workspace(client_token: str, browser_id: str) -> Workspace:
    """
    Return the workspace of a tab, creating it on first use.

    Args:
        client_token: Reflex token identifying the tab.
        browser_id: Durable browser identifier namespacing the stored token.
    """
    return _WORKSPACES.get(client_token, browser_id)
