import asyncio
import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import List, Optional

from cinefeed.core.exceptions import to_app_error
from cinefeed.core.services import MovieService
from cinefeed.schemas.movie import Movie
from cinefeed.services.orchestrator import LoadState, Orchestrator

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class SearchState(LoadState):
    query: str = ""
    results: List[Movie] = field(default_factory=list)
    is_searching: bool = False
    has_searched: bool = False

class SearchService(Orchestrator[SearchState]):
    """Movie search with at most one request in flight.

    Starting a search cancels the previous one; its result is never applied.
    """

    def __init__(self, movie_service: MovieService, executor: Optional[Executor] = None,
                 debounce_seconds: float = 0.5):
        super().__init__(SearchState(), executor)
        self.movie_service = movie_service
        self.debounce_seconds = debounce_seconds
        self._search_task: Optional[asyncio.Task] = None
        self._debounce_task: Optional[asyncio.Task] = None
        self._last_debounced: Optional[str] = None

    async def _perform_search(self, query: str) -> None:
        try:
            response = await self._run_blocking(self.movie_service.search_movies, query)
        except Exception as e:
            app_error = to_app_error(e)
            logger.error(f"Search for {query!r} failed: {app_error.message}")
            self._update(is_searching=False, has_searched=True,
                         last_error=app_error, error_message=app_error.message)
            return
        self._update(results=response.results, is_searching=False, has_searched=True)

    async def search_movies(self, query: str) -> None:
        """Search for ``query``, replacing any search still in flight"""
        if not query.strip():
            self.clear_search()
            return

        self._cancel_search()
        self._update(is_searching=True, last_error=None, error_message=None)
        task = asyncio.create_task(self._perform_search(query))
        self._search_task = task
        # A newer search cancels ``task``; wait() returns instead of raising then
        await asyncio.wait({task})

    def set_search_text(self, text: str) -> asyncio.Task:
        """Record typed text and search once it has been stable for the debounce interval"""
        self._update(query=text)
        if self._debounce_task is not None:
            self._debounce_task.cancel()
        self._debounce_task = asyncio.create_task(self._debounced(text))
        return self._debounce_task

    async def _debounced(self, text: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        if text == self._last_debounced:
            return
        self._last_debounced = text
        if text:
            await self.search_movies(text)
        else:
            self.clear_search()

    def _cancel_search(self) -> None:
        if self._search_task is not None and not self._search_task.done():
            logger.debug("Cancelling in-flight search")
            self._search_task.cancel()
        self._search_task = None

    def clear_search(self) -> None:
        self._cancel_search()
        self._update(results=[], is_searching=False, has_searched=False,
                     last_error=None, error_message=None)

    async def retry_search(self) -> None:
        if self._state.query:
            await self.search_movies(self._state.query)
