"""Tests for per tab wiring, observables and view model conversion."""

from __future__ import annotations

import asyncio

from stock_ui.controllers.observable import Observable
from stock_ui.data import DEMO_CLIENTS, DEMO_PRODUCTS
from stock_ui.models.reflex_models import client_to_model, product_to_model, product_to_option
from stock_ui.services.stock_service_demo import DemoStockService
from stock_ui.session import MemoryTokenStorage, SessionStatus, SessionStore
from stock_ui.workspace import Workspace, WorkspaceRegistry


def _workspace(service: DemoStockService) -> Workspace:
    return Workspace(service=service, session=SessionStore(service, MemoryTokenStorage()))


class TestWorkspace:
    def test_controllers_are_created_once(self, service: DemoStockService) -> None:
        workspace = _workspace(service)
        assert workspace.product_list() is workspace.product_list()
        assert workspace.client_list() is workspace.client_list()
        assert workspace.product_list().source.noun == "product"
        assert workspace.client_list().source.noun == "client"

        detail, workflow = workspace.client_detail("c1")
        assert workflow.detail is detail
        assert workspace.client_detail("c1")[0] is detail

    def test_reset_pages_drops_controllers(self, service: DemoStockService) -> None:
        workspace = _workspace(service)
        products = workspace.product_list()
        workspace.client_detail("c1")

        workspace.reset_pages()

        assert workspace.product_list() is not products
        assert workspace.details == {}

    def test_only_the_open_detail_page_is_kept(self, service: DemoStockService) -> None:
        workspace = _workspace(service)
        first = workspace.client_detail("c1")
        workspace.client_detail("c2")
        assert list(workspace.details) == ["c2"]
        assert workspace.client_detail("c1") is not first

    def test_logout_ends_session_and_drops_pages(
        self, service: DemoStockService, demo_token: str
    ) -> None:
        workspace = _workspace(service)
        asyncio.run(workspace.session.login(demo_token))
        products = workspace.product_list()

        workspace.logout()

        assert workspace.session.session.status is SessionStatus.UNAUTHENTICATED
        assert workspace.product_list() is not products


class TestWorkspaceRegistry:
    def _registry(self, service: DemoStockService, **kwargs):
        created: list[str] = []

        def factory(browser_id: str) -> Workspace:
            created.append(browser_id)
            return _workspace(service)

        return WorkspaceRegistry(factory, **kwargs), created

    def test_same_tab_reuses_its_workspace(self, service: DemoStockService) -> None:
        registry, created = self._registry(service)
        assert registry.get("tab1", "b1") is registry.get("tab1", "b1")
        assert created == ["b1"]

    def test_least_recently_used_tab_is_evicted_and_closed(
        self, service: DemoStockService
    ) -> None:
        registry, _ = self._registry(service, limit=2)
        registry.get("tab1", "b1")
        second = registry.get("tab2", "b1")
        second.product_list()
        registry.get("tab1", "b1")
        registry.get("tab3", "b1")

        assert "tab2" not in registry
        assert "tab1" in registry and "tab3" in registry
        assert len(registry) == 2
        assert second.products is None

    def test_idle_tabs_are_evicted(self, service: DemoStockService) -> None:
        now = [0.0]
        registry, created = self._registry(service, idle_seconds=60, clock=lambda: now[0])
        stale = registry.get("tab1", "b1")
        controller = stale.product_list()

        now[0] = 61.0
        registry.get("tab2", "b2")

        assert "tab1" not in registry
        assert stale.products is None
        assert controller._closed
        assert registry.get("tab1", "b1") is not stale
        assert created == ["b1", "b2", "b1"]


class TestObservable:
    def test_equal_state_is_not_published(self) -> None:
        observable = Observable(1)
        seen: list[int] = []
        observable.subscribe(seen.append)
        observable._set_state(1)
        observable._set_state(2)
        assert seen == [2]

    def test_failing_subscriber_does_not_stop_others(self) -> None:
        observable = Observable("a")
        seen: list[str] = []

        def broken(_state: str) -> None:
            raise RuntimeError("boom")

        observable.subscribe(broken)
        unsubscribe = observable.subscribe(seen.append)
        observable._set_state("b")
        unsubscribe()
        observable._set_state("c")

        assert seen == ["b"]
        assert observable.state == "c"


class TestViewModels:
    def test_product_model_carries_display_and_raw_values(self) -> None:
        model = product_to_model(DEMO_PRODUCTS[0])
        assert model.price == "R$ 24.90"
        assert model.price_in_cents == 2490
        assert product_to_option(DEMO_PRODUCTS[5]).label == "Fita isolante (global stock: 0)"

    def test_client_model_keeps_missing_contact_empty(self) -> None:
        model = client_to_model(DEMO_CLIENTS[1])
        assert (model.email, model.phone) == ("", "(21) 3333-1000")


class TestAuthFailure:
    def test_rejected_credential_logs_the_tab_out(
        self, service: DemoStockService, demo_token: str
    ) -> None:
        workspace = _workspace(service)
        asyncio.run(workspace.session.login(demo_token))
        service.dataset.tokens.clear()
        detail, _ = workspace.client_detail(DEMO_CLIENTS[0].id)

        state = asyncio.run(detail.load())

        assert state.error is not None
        assert workspace.session.session.status is SessionStatus.UNAUTHENTICATED
        assert service.credential is None
        assert workspace.details == {}

    def test_rejected_list_fetch_drops_cached_pages(
        self, service: DemoStockService, demo_token: str
    ) -> None:
        workspace = _workspace(service)

        async def scenario():
            await workspace.session.login(demo_token)
            products = workspace.product_list()
            products.mount()
            await products.wait_idle()
            service.dataset.tokens.clear()
            products.reload()
            await products.wait_idle()
            return products

        products = asyncio.run(scenario())
        assert workspace.session.session.status is SessionStatus.UNAUTHENTICATED
        assert workspace.products is None
        assert workspace.product_list() is not products
