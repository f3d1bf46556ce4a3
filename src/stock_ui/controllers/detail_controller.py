"""
Client detail view: one client plus the stock allocated to it.

The client and its stock lines are fetched concurrently and treated as a
single unit. If either request fails the view shows the error and neither
half is rendered. Nested workflows that change stock (a transfer) never
patch quantities locally; they call ``refresh()`` and the view is rebuilt
from the server.
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Callable

from stock_ui import config
from stock_ui.controllers.observable import Observable
from stock_ui.errors import AuthError, NotFoundError, StockUIError
from stock_ui.forms import validate_transfer
from stock_ui.lib import logs
from stock_ui.models.common import Notice
from stock_ui.models.stock import Client, ClientStockLine, Product
from stock_ui.services.stock_service import StockService

LOG = logs.logger(__file__)


@dataclass(frozen=True, slots=True)
class DetailState:
    """
    Snapshot of the client detail view.

    ``client`` and ``stock`` are always set together; after a failed load
    both keep their previous values and ``error`` explains why.
    """

    client: Client | None = None
    stock: tuple[ClientStockLine, ...] = ()
    loading: bool = False
    error: str | None = None
    notice: Notice | None = None

    @property
    def ready(self) -> bool:
        return self.client is not None and self.error is None


class DetailController(Observable[DetailState]):
    """
    Loads a client and its stock lines as a fail-fast parallel join.

    Args:
        service: Stock service used for both requests.
        client_id: Identity of the client shown.
        on_auth_error: Called when the back end rejects the credential.
    """

    def __init__(
        self,
        service: StockService,
        client_id: str,
        on_auth_error: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(DetailState())
        self.service = service
        self.client_id = client_id
        self.on_auth_error = on_auth_error
        self._issued = 0

    async def load(self) -> DetailState:
        """Fetch client and stock together; latest issued load wins."""
        self._issued += 1
        seq = self._issued
        self._set_state(replace(self.state, loading=True))
        try:
            client, stock = await asyncio.gather(
                self.service.get_client(self.client_id),
                self.service.list_client_stock(self.client_id),
            )
        except StockUIError as e:
            if seq != self._issued:
                return self.state
            if isinstance(e, NotFoundError):
                message = "Client not found."
            else:
                message = f"Could not load client details: {e.message}"
            LOG.warning("Detail load #%s for %s failed: %s", seq, self.client_id, e)
            self.auth_failed(e)
            self._set_state(
                replace(self.state, loading=False, error=message, notice=Notice.error(message))
            )
            return self.state
        if seq != self._issued:
            LOG.debug("Dropping stale detail load #%s", seq)
            return self.state
        self._set_state(
            DetailState(client=client, stock=tuple(stock), loading=False, error=None)
        )
        return self.state

    def auth_failed(self, error: StockUIError) -> None:
        """Report a rejected credential to the owner of the session."""
        if isinstance(error, AuthError) and self.on_auth_error is not None:
            self.on_auth_error()

    async def refresh(self) -> DetailState:
        """Re-run the joined load after a nested mutation."""
        return await self.load()

    def take_notice(self) -> Notice | None:
        """Return the pending notice and clear it."""
        notice = self.state.notice
        if notice is not None:
            self._set_state(replace(self.state, notice=None))
        return notice


@dataclass(frozen=True, slots=True)
class TransferState:
    catalogue: tuple[Product, ...] = ()
    submitting: bool = False
    notice: Notice | None = None


class TransferWorkflow(Observable[TransferState]):
    """
    Moves stock from the global catalogue to the client of a detail view.

    Args:
        detail: Detail view refreshed after a successful transfer.
        catalogue_limit: Number of products offered in the picker.
    """

    def __init__(
        self, detail: DetailController, catalogue_limit: int = config.CATALOGUE_LIMIT
    ) -> None:
        super().__init__(TransferState())
        self.detail = detail
        self.catalogue_limit = catalogue_limit

    async def load_catalogue(self) -> tuple[Product, ...]:
        """Fetch the products offered for transfer."""
        try:
            page = await self.detail.service.list_products(page=1, limit=self.catalogue_limit)
        except StockUIError as e:
            LOG.warning("Could not load product catalogue: %s", e)
            self.detail.auth_failed(e)
            self._set_state(
                replace(self.state, notice=Notice.error("Could not load the product catalogue."))
            )
            return self.state.catalogue
        self._set_state(replace(self.state, catalogue=page.items))
        return page.items

    def available(self, product_id: str) -> int | None:
        """Global stock of a catalogue product, None when unknown."""
        for product in self.state.catalogue:
            if product.id == product_id:
                return product.quantity
        return None

    async def submit(self, product_id: str | None, quantity: str | int | None) -> bool:
        """
        Validate and post a transfer, then refresh the detail view.

        Raises:
            ValidationError: If the form is invalid; nothing is sent.

        Returns:
            True when the server accepted the transfer.
        """
        product_id, qty = validate_transfer(
            product_id, quantity, self.available(product_id) if product_id else None
        )
        self._set_state(replace(self.state, submitting=True))
        try:
            await self.detail.service.transfer_stock(product_id, self.detail.client_id, qty)
        except StockUIError as e:
            LOG.warning("Transfer of %s x%s failed: %s", product_id, qty, e)
            self.detail.auth_failed(e)
            self._set_state(
                replace(self.state, submitting=False, notice=Notice.error(e.message))
            )
            return False
        self._set_state(
            replace(self.state, submitting=False, notice=Notice.success("Stock transferred."))
        )
        await self.detail.refresh()
        return True

    def take_notice(self) -> Notice | None:
        notice = self.state.notice
        if notice is not None:
            self._set_state(replace(self.state, notice=None))
        return notice
