"""Fan-out of independent API calls into one observable state object.

All state mutations happen on the asyncio event loop that drives a load.
Blocking API calls run in an executor and their results are awaited back
onto that loop, so writers never overlap.
"""
import asyncio
import functools
import logging
from concurrent.futures import Executor
from dataclasses import MISSING, dataclass, fields, replace
from typing import Any, Callable, Dict, FrozenSet, Generic, List, Optional, Sequence, TypeVar

from cinefeed.core.enums import LoadingPolicy, LoadPhase
from cinefeed.core.exceptions import BaseAppException, to_app_error

logger = logging.getLogger(__name__)

S = TypeVar("S")

Listener = Callable[[FrozenSet[str], Any], None]

@dataclass(frozen=True)
class LoadState:
    """Slots every orchestrated screen shares"""
    is_loading: bool = False
    phase: LoadPhase = LoadPhase.IDLE
    last_error: Optional[BaseAppException] = None
    error_message: Optional[str] = None

@dataclass
class SlotCall:
    """One independent API call of an orchestrated load.

    ``fetch`` is blocking and runs in the executor. ``merge`` runs on the
    event loop with the result and the current state and returns the slot
    changes to apply. When ``is_current`` is given and returns False for the
    state at completion time, the outcome is dropped.
    """
    slot: str
    fetch: Callable[[], Any]
    merge: Callable[[Any, Any], Dict[str, Any]]
    primary: bool = False
    clears_loading_on_failure: bool = False
    is_current: Optional[Callable[[Any], bool]] = None

class Observable(Generic[S]):
    """Snapshot state plus change notifications"""

    def __init__(self, initial_state: S):
        self._state = initial_state
        self._listeners: List[Listener] = []

    @property
    def state(self) -> S:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(changed_slots, snapshot)``; returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes) -> None:
        if not changes:
            return
        self._state = replace(self._state, **changes)
        changed = frozenset(changes)
        logger.debug(f"{type(self).__name__} updated {sorted(changed)}")
        for listener in list(self._listeners):
            try:
                listener(changed, self._state)
            except Exception:
                logger.exception(f"State listener failed in {type(self).__name__}")

class Orchestrator(Observable[S]):
    """Runs batches of SlotCalls against a shared LoadState subclass"""

    def __init__(self, initial_state: S, executor: Optional[Executor] = None,
                 loading_policy: LoadingPolicy = LoadingPolicy.ALL_SETTLED):
        super().__init__(initial_state)
        self.executor = executor
        self.loading_policy = LoadingPolicy(loading_policy)
        self._batch = 0

    async def _run_blocking(self, func: Callable, *args, **kwargs) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, functools.partial(func, *args, **kwargs))

    def _reset_slots(self, *names: str) -> Dict[str, Any]:
        defaults = {}
        for f in fields(self._state):
            defaults[f.name] = f.default_factory() if f.default is MISSING else f.default
        return {name: defaults[name] for name in names}

    def _accepts(self, call: SlotCall) -> bool:
        if call.is_current is None or call.is_current(self._state):
            return True
        logger.info(f"Dropping stale {call.slot} result")
        return False

    async def _settle(self, call: SlotCall) -> bool:
        """Run one call and apply its outcome; True on success"""
        try:
            result = await self._run_blocking(call.fetch)
        except Exception as e:
            if not self._accepts(call):
                return False
            app_error = to_app_error(e)
            logger.error(f"Loading {call.slot} failed: {app_error.message}")
            self._update(last_error=app_error, error_message=app_error.message)
            return False
        if not self._accepts(call):
            return False
        self._update(**call.merge(result, self._state))
        return True

    async def _run_batch(self, calls: Sequence[SlotCall], **initial_changes) -> None:
        """Dispatch every call concurrently and wait for all of them.

        Failures land in ``last_error`` without touching other slots or
        cancelling siblings. When ``is_loading`` drops depends on
        ``loading_policy``.
        """
        self._batch += 1
        batch = self._batch
        self._update(is_loading=True, phase=LoadPhase.LOADING, last_error=None,
                     error_message=None, **initial_changes)

        remaining = len(calls)

        async def run(call: SlotCall) -> None:
            nonlocal remaining
            succeeded = await self._settle(call)
            remaining -= 1
            if batch != self._batch:
                return
            if self.loading_policy is LoadingPolicy.PRIMARY:
                done = call.primary or (not succeeded and call.clears_loading_on_failure)
            else:
                done = remaining == 0
            if done and self._state.is_loading:
                self._update(is_loading=False, phase=LoadPhase.COMPLETED)
            elif self._state.is_loading:
                self._update(phase=LoadPhase.PARTIALLY_LOADED)

        try:
            await asyncio.gather(*(run(call) for call in calls))
        finally:
            # Covers cancellation; a settled batch has already cleared the flag
            if batch == self._batch and self._state.is_loading:
                self._update(is_loading=False, phase=LoadPhase.COMPLETED)
