"""Tests for the paginated, debounced, latest-wins list controller."""

from __future__ import annotations

import asyncio

from stock_ui.controllers.list_controller import ListController
from stock_ui.errors import AuthError, NetworkError, RemoteError
from stock_ui.models.common import Notice
from tests.fakes import GatedSource, make_products, settle


async def _mounted(
    source: GatedSource, items=None, total_records: int | None = None, debounce: float = 0.05
) -> ListController:
    """Mount a controller and answer its first fetch."""
    controller = ListController(source, page_size=10, debounce=debounce)
    controller.mount()
    await settle()
    source.calls[0].resolve(items if items is not None else make_products(10), total_records)
    await controller.wait_idle()
    return controller


class TestInitialFetch:
    def test_mount_fetches_first_page(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = ListController(source, page_size=10)
            controller.mount()
            await settle()
            assert controller.state.loading
            assert [(c.page, c.page_size, c.search) for c in source.calls] == [(1, 10, "")]
            source.calls[0].resolve(make_products(3))
            state = await controller.wait_idle()
            assert not state.loading
            assert [p.id for p in state.items] == ["p1", "p2", "p3"]
            assert state.metadata.total_pages == 1

        asyncio.run(scenario())

    def test_mounting_again_refetches_the_same_query(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(10), total_records=25)
            controller.set_page(2)
            await settle()
            source.calls[-1].resolve(make_products(10), 25)
            await controller.wait_idle()

            controller.mount()
            await settle()
            assert len(source.calls) == 3
            assert (source.calls[-1].page, source.calls[-1].search) == (2, "")
            source.calls[-1].resolve(make_products(4, prefix="Fresh"), 25)
            state = await controller.wait_idle()
            assert state.items[0].name == "Fresh 1"

        asyncio.run(scenario())


class TestSearchDebounce:
    def test_burst_of_keystrokes_commits_once(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source)
            for term in ("p", "pa", "par"):
                controller.set_search_term(term)
                await asyncio.sleep(0.01)
            assert controller.query.raw_search_term == "par"
            assert controller.query.committed_search_term == ""
            assert len(source.calls) == 1

            await asyncio.sleep(0.1)
            await settle()
            assert len(source.calls) == 2
            assert source.calls[1].search == "par"
            assert controller.query.committed_search_term == "par"

        asyncio.run(scenario())

    def test_commit_resets_to_first_page(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(10), total_records=30)
            controller.set_page(3)
            await settle()
            source.calls[-1].resolve(make_products(10), 30)
            await controller.wait_idle()
            assert controller.query.page == 3

            controller.set_search_term("bolt")
            await asyncio.sleep(0.1)
            await settle()
            assert (source.calls[-1].page, source.calls[-1].search) == (1, "bolt")
            assert controller.query.page == 1

        asyncio.run(scenario())

    def test_wait_idle_blocks_while_a_term_is_pending(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source)
            controller.set_search_term("x")
            waiter = asyncio.ensure_future(controller.wait_idle())
            await asyncio.sleep(0.1)
            await settle()
            assert not waiter.done()
            source.calls[-1].resolve([])
            state = await waiter
            assert state.items == ()

        asyncio.run(scenario())


class TestPagination:
    def test_next_page_on_three_page_list(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(10), total_records=25)
            assert controller.state.metadata.total_pages == 3

            controller.next_page()
            await settle()
            assert source.calls[-1].page == 2
            source.calls[-1].resolve(make_products(10), 25)
            await controller.wait_idle()
            assert controller.query.page == 2

        asyncio.run(scenario())

    def test_page_is_clamped_to_known_range(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(10), total_records=25)
            controller.set_page(9)
            await settle()
            assert controller.query.page == 3
            source.calls[-1].resolve(make_products(5), 25)
            await controller.wait_idle()

            controller.next_page()
            await settle()
            assert controller.query.page == 3
            assert len(source.calls) == 2

            controller.set_page(0)
            await settle()
            assert controller.query.page == 1

        asyncio.run(scenario())


class TestLatestWins:
    def test_out_of_order_responses_keep_latest(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(10), total_records=30)
            controller.set_page(2)
            controller.set_page(3)
            await settle()
            first, second = source.calls[1], source.calls[2]
            assert (first.page, second.page) == (2, 3)

            second.resolve(make_products(2, prefix="Third"), 30)
            await settle()
            first.resolve(make_products(2, prefix="Second"), 30)
            await settle()

            state = controller.state
            assert not state.loading
            assert [p.name for p in state.items] == ["Third 1", "Third 2"]
            assert state.metadata.current_page == 3

        asyncio.run(scenario())

    def test_stale_failure_is_dropped(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(10), total_records=30)
            controller.set_page(2)
            controller.set_page(3)
            await settle()
            source.calls[2].resolve(make_products(1, prefix="Third"), 30)
            await settle()
            source.calls[1].fail(NetworkError("timeout"))
            await settle()

            assert controller.state.error is None
            assert controller.take_notice() is None
            assert [p.name for p in controller.state.items] == ["Third 1"]

        asyncio.run(scenario())

    def test_loading_stays_on_until_latest_resolves(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(10), total_records=30)
            controller.set_page(2)
            controller.set_page(3)
            await settle()
            source.calls[1].resolve(make_products(1), 30)
            await settle()
            assert controller.state.loading
            source.calls[2].resolve(make_products(1), 30)
            await controller.wait_idle()
            assert not controller.state.loading

        asyncio.run(scenario())

    def test_closed_controller_ignores_responses(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(3))
            controller.reload()
            await settle()
            controller.close()
            source.calls[-1].resolve([])
            await settle()
            assert len(controller.state.items) == 3

        asyncio.run(scenario())


class TestFetchFailure:
    def test_failed_reload_keeps_previous_items(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(4))
            controller.reload()
            await settle()
            source.calls[-1].fail(NetworkError("connection refused"))
            state = await controller.wait_idle()

            assert not state.loading
            assert len(state.items) == 4
            assert "connection refused" in state.error
            notice = controller.take_notice()
            assert notice.level == "error"
            assert controller.take_notice() is None

        asyncio.run(scenario())

    def test_success_clears_previous_error(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(4))
            controller.reload()
            await settle()
            source.calls[-1].fail(NetworkError("down"))
            await controller.wait_idle()
            controller.reload()
            await settle()
            source.calls[-1].resolve(make_products(2))
            state = await controller.wait_idle()
            assert state.error is None
            assert len(state.items) == 2

        asyncio.run(scenario())


class TestMutations:
    def test_create_returns_to_first_page_and_refetches(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(10), total_records=25)
            controller.set_page(2)
            await settle()
            source.calls[-1].resolve(make_products(10), 25)
            await controller.wait_idle()
            fetches = len(source.calls)

            created = await controller.create({"name": "Chave inglesa"})
            await settle()

            assert created.name == "Chave inglesa"
            assert len(source.calls) == fetches + 1
            assert source.calls[-1].page == 1
            assert controller.query.page == 1
            assert controller.take_notice() == Notice.success("Product created.")

        asyncio.run(scenario())

    def test_update_replaces_item_in_place(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(3))

            updated = await controller.update("p2", {"name": "Renamed"})

            assert updated.id == "p2"
            assert [p.name for p in controller.state.items] == [
                "Product 1",
                "Renamed",
                "Product 3",
            ]
            assert len(source.calls) == 1

        asyncio.run(scenario())

    def test_update_of_item_not_on_page_leaves_items(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(3))
            await controller.update("p99", {"name": "Elsewhere"})
            assert [p.id for p in controller.state.items] == ["p1", "p2", "p3"]

        asyncio.run(scenario())

    def test_delete_removes_exactly_one_item(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(3))

            assert await controller.delete("p1")

            assert [p.id for p in controller.state.items] == ["p2", "p3"]
            assert len(source.calls) == 1
            assert controller.take_notice().level == "success"

        asyncio.run(scenario())

    def test_refused_mutation_leaves_items_untouched(self) -> None:
        async def scenario():
            source = GatedSource()
            controller = await _mounted(source, make_products(3))

            source.fail_next = RemoteError("Nome obrigatório", 400)
            assert await controller.create({"name": ""}) is None
            assert controller.take_notice().level == "error"

            source.fail_next = RemoteError("produto não encontrado", 404)
            assert not await controller.delete("p2")

            assert [p.id for p in controller.state.items] == ["p1", "p2", "p3"]
            assert len(source.calls) == 1
            assert controller.query.page == 1

        asyncio.run(scenario())


class TestAuthFailure:
    def test_rejected_credential_is_reported(self) -> None:
        async def scenario():
            source = GatedSource()
            rejected: list[bool] = []
            controller = ListController(
                source, page_size=10, on_auth_error=lambda: rejected.append(True)
            )
            controller.mount()
            await settle()
            source.calls[0].fail(AuthError("Token inválido ou expirado"))
            await controller.wait_idle()

            source.fail_next = AuthError("Token inválido ou expirado")
            await controller.delete("p1")
            return rejected

        assert asyncio.run(scenario()) == [True, True]

    def test_other_failures_do_not_report(self) -> None:
        async def scenario():
            source = GatedSource()
            rejected: list[bool] = []
            controller = await _mounted(source)
            controller.on_auth_error = lambda: rejected.append(True)
            controller.reload()
            await settle()
            source.calls[-1].fail(NetworkError("down"))
            await controller.wait_idle()
            return rejected

        assert asyncio.run(scenario()) == []
