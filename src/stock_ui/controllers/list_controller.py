"""
Paginated, searchable list synchronized with the back end.

A ListController owns the query of one list view (page, fixed page size,
search box contents, committed search term) and the last accepted page of
results. Two ordering rules hold:

- Debounce: every edit of the search box restarts a single pending timer.
  Only when it fires does the committed term change, and the page goes
  back to 1.
- Latest-issued-wins: requests are never cancelled. Each one is tagged
  with an increasing sequence number and its response is applied only if
  no newer request has been issued since.

Mutations are applied only after the server confirms them. A created item
triggers a fresh fetch of page 1; updated and deleted items are reconciled
in place without a refetch.
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Callable, Generic, TypeVar

from stock_ui import config
from stock_ui.controllers.observable import Observable
from stock_ui.controllers.sources import ListSource
from stock_ui.errors import AuthError, StockUIError
from stock_ui.lib import logs
from stock_ui.models.common import ListMetadata, ListQuery, ListResult, Notice

LOG = logs.logger(__file__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ListState(Generic[T]):
    """
    Snapshot of a list view.

    Attributes:
        query: Current query.
        result: Last accepted page, None until the first fetch succeeds.
        loading: True while the latest issued request is unresolved.
        error: Message of the last failed fetch, cleared by a success.
        notice: Pending transient notification, if any.
    """

    query: ListQuery
    result: ListResult[T] | None = None
    loading: bool = False
    error: str | None = None
    notice: Notice | None = None

    @property
    def items(self) -> tuple[T, ...]:
        return self.result.items if self.result else ()

    @property
    def metadata(self) -> ListMetadata | None:
        return self.result.metadata if self.result else None


class ListController(Observable[ListState[T]], Generic[T]):
    """
    Keeps one list view in sync with its ListSource.

    All methods must be called from the event loop that runs the fetches.

    Args:
        source: Remote collection to page through.
        page_size: Fixed number of items per page.
        debounce: Quiet period in seconds before a search edit is committed.
        on_auth_error: Called when the back end rejects the credential.
    """

    def __init__(
        self,
        source: ListSource[T],
        page_size: int = config.PAGE_SIZE,
        debounce: float = config.DEBOUNCE_SECONDS,
        on_auth_error: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(ListState(query=ListQuery(page_size=page_size)))
        self.source = source
        self.debounce = debounce
        self.on_auth_error = on_auth_error
        self._timer: asyncio.TimerHandle | None = None
        self._timer_generation = 0
        self._issued = 0
        self._issued_key: tuple[int, str] | None = None
        self._latest_done = True
        self._tasks: set[asyncio.Task] = set()
        self._idle = asyncio.Event()
        self._idle.set()
        self._closed = False

    @property
    def query(self) -> ListQuery:
        return self.state.query

    @property
    def issued(self) -> int:
        """Sequence number of the most recently issued request."""
        return self._issued

    # Query

    def mount(self) -> None:
        """Fetch the current query; every mount of the page shows fresh data."""
        self._issue_fetch()

    def set_search_term(self, term: str) -> None:
        """Record a keystroke and restart the debounce timer."""
        self._set_query(raw_search_term=term)
        if self._timer is not None:
            self._timer.cancel()
        self._timer_generation += 1
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(
            self.debounce, self._commit_search, self._timer_generation
        )
        self._update_idle()

    def set_page(self, page: int) -> None:
        """Move to ``page``, clamped to the known page range."""
        page = max(page, 1)
        metadata = self.state.metadata
        if metadata and metadata.total_pages > 0:
            page = min(page, metadata.total_pages)
        self._set_query(page=page)
        self._sync()

    def next_page(self) -> None:
        self.set_page(self.query.page + 1)

    def previous_page(self) -> None:
        self.set_page(self.query.page - 1)

    def reload(self) -> None:
        """Fetch the current page again."""
        self._issue_fetch()

    def _commit_search(self, generation: int) -> None:
        if generation != self._timer_generation or self._closed:
            return
        self._timer = None
        LOG.debug("Committing search term %r", self.query.raw_search_term)
        self._set_query(committed_search_term=self.query.raw_search_term, page=1)
        self._sync()
        self._update_idle()

    def _set_query(self, **changes) -> None:
        self._set_state(replace(self.state, query=replace(self.query, **changes)))

    # Fetching

    def _sync(self) -> None:
        """Issue a fetch if the (page, committed term) key changed."""
        if self.query.key != self._issued_key:
            self._issue_fetch()

    def _issue_fetch(self) -> None:
        if self._closed:
            return
        self._issued += 1
        seq = self._issued
        query = self.query
        self._issued_key = query.key
        self._latest_done = False
        self._update_idle()
        LOG.debug(
            "Fetch #%s %s page:%s search:%r",
            seq,
            self.source.noun,
            query.page,
            query.committed_search_term,
        )
        self._set_state(replace(self.state, loading=True))
        task = asyncio.get_running_loop().create_task(self._run_fetch(seq, query))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_fetch(self, seq: int, query: ListQuery) -> None:
        try:
            await self._fetch(seq, query)
        finally:
            if seq == self._issued:
                self._latest_done = True
                self._update_idle()

    async def _fetch(self, seq: int, query: ListQuery) -> None:
        try:
            result = await self.source.fetch(
                query.page, query.page_size, query.committed_search_term
            )
        except StockUIError as e:
            if not self._is_current(seq):
                LOG.debug("Dropping stale failure of fetch #%s: %s", seq, e)
                return
            LOG.warning("Fetch #%s of %ss failed: %s", seq, self.source.noun, e)
            self._auth_failed(e)
            message = f"Could not load {self.source.noun}s: {e.message}"
            self._set_state(
                replace(
                    self.state,
                    loading=False,
                    error=message,
                    notice=Notice.error(message),
                )
            )
            return
        if not self._is_current(seq):
            LOG.debug("Dropping stale response of fetch #%s (latest #%s)", seq, self._issued)
            return
        self._set_state(replace(self.state, result=result, loading=False, error=None))

    def _auth_failed(self, error: StockUIError) -> None:
        if isinstance(error, AuthError) and self.on_auth_error is not None:
            self.on_auth_error()

    def _is_current(self, seq: int) -> bool:
        return seq == self._issued and not self._closed

    def _update_idle(self) -> None:
        if self._closed or (self._timer is None and self._latest_done):
            self._idle.set()
        else:
            self._idle.clear()

    async def wait_idle(self) -> ListState[T]:
        """Wait until no search edit is pending and the latest request resolved."""
        await self._idle.wait()
        return self.state

    def close(self) -> None:
        """Stop the debounce timer and ignore every later response."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._closed = True
        self._update_idle()

    # Mutations

    async def create(self, payload: dict) -> T | None:
        """
        Create an item, then show page 1 as the server orders it.

        Returns:
            The created item, or None when the server refused it.
        """
        try:
            item = await self.source.create(payload)
        except StockUIError as e:
            self._mutation_failed("create", e)
            return None
        self._set_state(
            replace(
                self.state,
                query=replace(self.query, page=1),
                notice=Notice.success(f"{self.source.noun.capitalize()} created."),
            )
        )
        self._issue_fetch()
        return item

    async def update(self, item_id: str, payload: dict) -> T | None:
        """
        Update an item and replace it in place, keeping the order.

        Returns:
            The updated item, or None when the server refused it.
        """
        try:
            item = await self.source.update(item_id, payload)
        except StockUIError as e:
            self._mutation_failed("update", e)
            return None
        items = list(self.state.items)
        identity = self.source.identity(item)
        for index, current in enumerate(items):
            if self.source.identity(current) == identity:
                items[index] = item
                break
        else:
            LOG.info("Updated %s %s is not on the current page", self.source.noun, identity)
        self._replace_items(items, f"{self.source.noun.capitalize()} updated.")
        return item

    async def delete(self, item_id: str) -> bool:
        """
        Delete an item and drop it from the current page.

        Returns:
            True when the server confirmed the deletion.
        """
        try:
            await self.source.delete(item_id)
        except StockUIError as e:
            self._mutation_failed("delete", e)
            return False
        items = list(self.state.items)
        for index, current in enumerate(items):
            if self.source.identity(current) == item_id:
                del items[index]
                break
        self._replace_items(items, f"{self.source.noun.capitalize()} deleted.")
        return True

    def _replace_items(self, items: list[T], message: str) -> None:
        result = self.state.result
        if result is not None:
            result = replace(result, items=tuple(items))
        self._set_state(replace(self.state, result=result, notice=Notice.success(message)))

    def _mutation_failed(self, action: str, error: StockUIError) -> None:
        LOG.warning("Could not %s %s: %s", action, self.source.noun, error)
        self._auth_failed(error)
        self._set_state(
            replace(
                self.state,
                notice=Notice.error(f"Could not {action} {self.source.noun}: {error.message}"),
            )
        )

    def take_notice(self) -> Notice | None:
        """Return the pending notice and clear it."""
        notice = self.state.notice
        if notice is not None:
            self._set_state(replace(self.state, notice=None))
        return notice
