"""
Reflex state management for the Stock UI application.

The Reflex states are thin: they hold serializable copies of what the
controllers in the tab's Workspace own, and forward user events to them.

- AuthState: session status, login/register/logout, route guarding
- ProductListState / ClientListState: list pages built on ListPageMixin
- ClientDetailState: client detail page and the stock transfer modal

List and detail events run as background tasks so a slow request never
blocks keystrokes or page changes of the same tab; ordering is enforced
by the controllers, not by Reflex's event queue.
"""

import uuid
from typing import Any

import reflex as rx
from reflex.event import EventSpec

from stock_ui.controllers import DetailController, ListController, TransferWorkflow
from stock_ui.errors import AuthError, StockUIError, ValidationError
from stock_ui.forms import validate_client, validate_product
from stock_ui.guard import GuardOutcome, guard, page_outcome
from stock_ui.lib import logs
from stock_ui.models.common import Notice
from stock_ui.models.reflex_models import (
    ClientModel,
    ProductModel,
    ProductOptionModel,
    StockLineModel,
    client_to_model,
    product_to_model,
    product_to_option,
    stock_line_to_model,
)
from stock_ui.session import Session
from stock_ui.workspace import Workspace, get_workspace

LOG = logs.logger(__file__)


def _toast(notice: Notice | None):
    """Turn a controller notice into a toast event, if there is one."""
    if notice is None:
        return None
    if notice.level == "error":
        return rx.toast.error(notice.message)
    return rx.toast.success(notice.message)


def _events(*events):
    return [event for event in events if event is not None]


async def _session_redirect(state: rx.State) -> EventSpec | None:
    """Re-run the route guard; a credential rejected mid-page forces the login redirect."""
    auth = await state.get_state(AuthState)
    return auth._sync_session(auth.workspace().session.session)


class AuthState(rx.State):
    """Session status of the tab plus the login and register forms."""

    browser_id: str = rx.LocalStorage("", name="stockBrowserId")
    status: str = "unknown"
    guard_outcome: str = GuardOutcome.LOADING.value
    user_email: str = ""
    is_submitting: bool = False

    @rx.var
    def is_authenticated(self) -> bool:
        return self.status == "authenticated"

    def workspace(self) -> Workspace:
        """Return this tab's Workspace, assigning a browser id on first use."""
        if not self.browser_id:
            self.browser_id = uuid.uuid4().hex
        return get_workspace(self.router.session.client_token, self.browser_id)

    def _sync_session(self, session: Session) -> EventSpec | None:
        self.status = session.status.value
        self.user_email = session.user.email if session.user else ""
        path = self.router.page.path
        decision = guard(session, path)
        self.guard_outcome = page_outcome(session, path).value
        if decision.outcome is GuardOutcome.REDIRECT:
            return rx.redirect(decision.redirect_to, replace=decision.replace)
        return None

    @rx.event
    async def check_session(self):
        """
        Page on_load hook: resolve the session once, then guard the route.

        Protected pages render only a placeholder until this settles.
        """
        session = await self.workspace().session.init()
        return self._sync_session(session)

    @rx.event
    async def login(self, form_data: dict[str, Any]):
        """Submit the login form."""
        self.is_submitting = True
        yield
        store = self.workspace().session
        try:
            await store.authenticate(
                form_data.get("email", ""), form_data.get("password", "")
            )
        except ValidationError as e:
            yield rx.toast.error(e.message)
            return
        except AuthError as e:
            LOG.info("Login rejected: %s", e)
            yield rx.toast.error("Invalid credentials. Please try again.")
            return
        except StockUIError as e:
            yield rx.toast.error(e.message)
            return
        finally:
            self.is_submitting = False
        self._sync_session(store.session)
        yield rx.redirect("/")
        yield rx.toast.success("Logged in.")

    @rx.event
    async def register(self, form_data: dict[str, Any]):
        """Submit the registration form."""
        self.is_submitting = True
        yield
        try:
            await self.workspace().session.register(
                form_data.get("email", ""),
                form_data.get("password", ""),
                form_data.get("password_confirm", ""),
            )
        except StockUIError as e:
            yield rx.toast.error(e.message)
            return
        finally:
            self.is_submitting = False
        yield rx.redirect("/login")
        yield rx.toast.success("Account created. Please log in.")

    @rx.event
    def logout(self):
        workspace = self.workspace()
        workspace.logout()
        self.status = workspace.session.session.status.value
        self.user_email = ""
        self.guard_outcome = GuardOutcome.REDIRECT.value
        return rx.redirect("/login", replace=True)


class ListPageMixin(rx.State, mixin=True):
    """
    Shared vars and events of a paginated list page.

    Subclasses provide the controller and copy items into their typed list.
    """

    page: int = 1
    total_pages: int = 0
    total_records: int = 0
    search_term: str = ""
    is_loading: bool = True
    error: str = ""
    has_result: bool = False
    item_count: int = 0

    create_open: bool = False
    edit_open: bool = False
    delete_open: bool = False
    target_id: str = ""
    target_name: str = ""

    @rx.var
    def is_empty(self) -> bool:
        return self.has_result and self.item_count == 0

    async def _list_controller(self) -> ListController:
        auth = await self.get_state(AuthState)
        return self._pick_controller(auth.workspace())

    def _pick_controller(self, workspace: Workspace) -> ListController:
        raise NotImplementedError

    def _set_items(self, items) -> None:
        raise NotImplementedError

    def _payload(self, form_data: dict[str, Any]) -> dict:
        raise NotImplementedError

    def _apply(self, controller: ListController):
        state = controller.state
        self.page = state.query.page
        self.search_term = state.query.raw_search_term
        self.is_loading = state.loading
        self.error = state.error or ""
        if state.result is not None:
            self.has_result = True
            self.total_pages = state.result.metadata.total_pages
            self.total_records = state.result.metadata.total_records
            self.item_count = len(state.items)
            self._set_items(state.items)
        return _toast(controller.take_notice())

    async def _collect(self, controller: ListController):
        return _events(self._apply(controller), await _session_redirect(self))

    async def _settle(self, controller: ListController):
        await controller.wait_idle()
        async with self:
            return await self._collect(controller)

    @rx.event(background=True)
    async def mount(self):
        async with self:
            controller = await self._list_controller()
            controller.mount()
            self._apply(controller)
        yield await self._settle(controller)

    @rx.event(background=True)
    async def set_search(self, term: str):
        async with self:
            controller = await self._list_controller()
            controller.set_search_term(term)
            self.search_term = term
        yield await self._settle(controller)

    @rx.event(background=True)
    async def go_to_page(self, page: int):
        async with self:
            controller = await self._list_controller()
            controller.set_page(page)
            self._apply(controller)
        yield await self._settle(controller)

    @rx.event
    def open_create(self):
        self.create_open = True

    @rx.event
    def set_create_open(self, value: bool):
        self.create_open = value

    @rx.event
    def set_edit_open(self, value: bool):
        self.edit_open = value

    @rx.event
    def set_delete_open(self, value: bool):
        self.delete_open = value

    @rx.event
    def open_delete(self, item_id: str, name: str):
        self.target_id = item_id
        self.target_name = name
        self.delete_open = True

    @rx.event(background=True)
    async def submit_create(self, form_data: dict[str, Any]):
        try:
            payload = self._payload(form_data)
        except ValidationError as e:
            yield rx.toast.error(e.message)
            return
        async with self:
            controller = await self._list_controller()
        created = await controller.create(payload)
        async with self:
            if created is not None:
                self.create_open = False
            events = await self._collect(controller)
        yield events
        if created is not None:
            yield await self._settle(controller)

    @rx.event(background=True)
    async def submit_edit(self, form_data: dict[str, Any]):
        try:
            payload = self._payload(form_data)
        except ValidationError as e:
            yield rx.toast.error(e.message)
            return
        async with self:
            controller = await self._list_controller()
            item_id = self.target_id
        updated = await controller.update(item_id, payload)
        async with self:
            if updated is not None:
                self.edit_open = False
            events = await self._collect(controller)
        yield events

    @rx.event(background=True)
    async def confirm_delete(self):
        async with self:
            controller = await self._list_controller()
            item_id = self.target_id
        await controller.delete(item_id)
        async with self:
            self.delete_open = False
            self.target_id = ""
            self.target_name = ""
            events = await self._collect(controller)
        yield events


class ProductListState(ListPageMixin, rx.State):
    """Products page."""

    items: list[ProductModel] = []
    editing: ProductModel = ProductModel()

    def _pick_controller(self, workspace: Workspace) -> ListController:
        return workspace.product_list()

    def _set_items(self, items) -> None:
        self.items = [product_to_model(p) for p in items]

    def _payload(self, form_data: dict[str, Any]) -> dict:
        return validate_product(
            form_data.get("name", ""),
            form_data.get("description", ""),
            form_data.get("price", ""),
            form_data.get("quantity", ""),
        )

    @rx.event
    def open_edit(self, item: ProductModel):
        self.editing = item
        self.target_id = item.id
        self.target_name = item.name
        self.edit_open = True


class ClientListState(ListPageMixin, rx.State):
    """Clients page."""

    items: list[ClientModel] = []
    editing: ClientModel = ClientModel()

    def _pick_controller(self, workspace: Workspace) -> ListController:
        return workspace.client_list()

    def _set_items(self, items) -> None:
        self.items = [client_to_model(c) for c in items]

    def _payload(self, form_data: dict[str, Any]) -> dict:
        return validate_client(
            form_data.get("name", ""),
            form_data.get("email", ""),
            form_data.get("phone", ""),
        )

    @rx.event
    def open_edit(self, item: ClientModel):
        self.editing = item
        self.target_id = item.id
        self.target_name = item.name
        self.edit_open = True


class ClientDetailState(rx.State):
    """Client detail page with its stock and the transfer modal."""

    client_id: str = ""
    client_name: str = ""
    client_email: str = ""
    client_phone: str = ""
    stock: list[StockLineModel] = []
    is_loading: bool = True
    error: str = ""

    transfer_open: bool = False
    is_transferring: bool = False
    options: list[ProductOptionModel] = []
    selected_product_id: str = ""
    transfer_quantity: str = ""

    async def _controllers(self) -> tuple[DetailController, TransferWorkflow]:
        auth = await self.get_state(AuthState)
        client_id = self.router.page.params.get("client_id", "")
        return auth.workspace().client_detail(client_id)

    def _apply(self, detail: DetailController):
        state = detail.state
        self.is_loading = state.loading
        self.error = state.error or ""
        if state.client is not None:
            self.client_name = state.client.name
            self.client_email = state.client.email or ""
            self.client_phone = state.client.phone or ""
            self.stock = [stock_line_to_model(line) for line in state.stock]
        return _toast(detail.take_notice())

    @rx.event(background=True)
    async def load(self):
        async with self:
            detail, _ = await self._controllers()
            if detail.client_id != self.client_id:
                self.client_id = detail.client_id
                self.client_name = ""
                self.client_email = ""
                self.client_phone = ""
                self.stock = []
                self.error = ""
            self.is_loading = True
        await detail.load()
        async with self:
            events = _events(self._apply(detail), await _session_redirect(self))
        yield events

    @rx.event(background=True)
    async def open_transfer(self):
        async with self:
            _, workflow = await self._controllers()
            self.transfer_open = True
            self.selected_product_id = ""
            self.transfer_quantity = ""
        catalogue = await workflow.load_catalogue()
        async with self:
            self.options = [product_to_option(p) for p in catalogue]
            events = _events(_toast(workflow.take_notice()), await _session_redirect(self))
        yield events

    @rx.event
    def set_transfer_open(self, value: bool):
        self.transfer_open = value

    @rx.event
    def set_selected_product_id(self, value: str):
        self.selected_product_id = value

    @rx.event
    def set_transfer_quantity(self, value: str):
        self.transfer_quantity = value

    @rx.event(background=True)
    async def submit_transfer(self):
        async with self:
            detail, workflow = await self._controllers()
            product_id = self.selected_product_id
            quantity = self.transfer_quantity
            self.is_transferring = True
        try:
            accepted = await workflow.submit(product_id, quantity)
        except ValidationError as e:
            async with self:
                self.is_transferring = False
            yield rx.toast.error(e.message)
            return
        async with self:
            self.is_transferring = False
            if accepted:
                self.transfer_open = False
            events = _events(
                _toast(workflow.take_notice()),
                self._apply(detail),
                await _session_redirect(self),
            )
        yield events
