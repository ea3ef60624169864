from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from types import TracebackType

from diproxy.exceptions import DIProxyCircularDependencyError

# Ids being resolved in the current thread, outermost first
_resolution_chain: ContextVar[tuple[str, ...]] = ContextVar(
    "diproxy_resolution_chain",
    default=(),
)

# Guards every ResolutionLock's owner state and the waits-for graph below
_state = threading.Condition()
_blocking_on: dict[int, ResolutionLock] = {}


def current_chain() -> list[str]:
    """Return the ids being resolved in the current thread, outermost first."""
    return list(_resolution_chain.get())


@contextmanager
def resolving(service_id: str) -> Iterator[None]:
    """Track ``service_id`` as being resolved in the current thread.

    Raises:
        DIProxyCircularDependencyError: If ``service_id`` is already being
            resolved further up the current chain.

    """
    chain = _resolution_chain.get()
    if service_id in chain:
        raise DIProxyCircularDependencyError(service_id, list(chain))

    token = _resolution_chain.set((*chain, service_id))
    try:
        yield
    finally:
        _resolution_chain.reset(token)


class ResolutionLock:
    """Reentrant lock guarding the first resolution of one service.

    A thread that would wait on a lock held by a thread which, directly or
    through other waiting threads, waits on a lock held by the caller raises
    ``DIProxyCircularDependencyError`` instead of blocking forever.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        self._owner: int | None = None
        self._count = 0

    def acquire(self) -> None:
        me = threading.get_ident()
        with _state:
            while self._owner is not None and self._owner != me:
                if self._waits_on(me):
                    raise DIProxyCircularDependencyError(self.service_id, current_chain())
                _blocking_on[me] = self
                try:
                    _state.wait()
                finally:
                    del _blocking_on[me]
            self._owner = me
            self._count += 1

    def release(self) -> None:
        with _state:
            if self._owner != threading.get_ident():
                msg = "Cannot release a resolution lock owned by another thread."
                raise RuntimeError(msg)
            self._count -= 1
            if self._count == 0:
                self._owner = None
                _state.notify_all()

    def _waits_on(self, thread_id: int) -> bool:
        owner = self._owner
        seen: set[int] = set()
        while owner is not None and owner not in seen:
            if owner == thread_id:
                return True
            seen.add(owner)
            lock = _blocking_on.get(owner)
            if lock is None:
                return False
            owner = lock._owner
        return False

    def __enter__(self) -> None:
        self.acquire()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()
