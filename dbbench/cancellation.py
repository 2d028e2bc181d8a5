"""Cooperative interruption of running benchmarks."""

import signal
from contextlib import contextmanager
from typing import Dict, Iterable, Set

from gevent.event import Event
from gevent.lock import Semaphore

from dbbench.logging import init_logger

logger = init_logger(__name__)


class InterruptListener:
    """
    One subscription to a :class:`CancellationSource`.

    Workers poll :meth:`interrupted` between iterations. Polling never
    blocks and an in-flight statement is never preempted.
    """

    def __init__(self, source: "CancellationSource"):
        self._source = source
        self._event = Event()

    def interrupted(self) -> bool:
        return self._event.is_set()

    def _notify(self) -> None:
        self._event.set()

    def close(self) -> None:
        self._source.unregister(self)

    def __enter__(self) -> "InterruptListener":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class CancellationSource:
    """
    Broadcasts an external interrupt to every registered listener.

    Only listeners registered at the moment of the interrupt are notified,
    later registrations start out clear. There is no coordination between
    listeners: each one decides on its own when it observes the interrupt.
    """

    def __init__(self):
        self._listeners: Set[InterruptListener] = set()
        self.lock = Semaphore(value=1)  # Gevent-compatible lock

    def register(self) -> InterruptListener:
        listener = InterruptListener(self)
        with self.lock:
            self._listeners.add(listener)
        return listener

    def unregister(self, listener: InterruptListener) -> None:
        with self.lock:
            self._listeners.discard(listener)

    @property
    def num_listeners(self) -> int:
        with self.lock:
            return len(self._listeners)

    def trigger(self) -> None:
        """Deliver an interrupt to all current listeners."""
        # No lock: the signal handler may run while register() holds it.
        # Copying the set is a single atomic operation.
        listeners = self._listeners.copy()
        for listener in listeners:
            listener._notify()
        logger.info(f"🛑 Interrupt delivered to {len(listeners)} listener(s)")

    @contextmanager
    def handle_signals(self, signals: Iterable[int] = (signal.SIGINT,)):
        """
        Route the given process signals to :meth:`trigger` while active.

        The previous handlers are restored on exit. Must be entered from the
        main thread.
        """

        def handler(signum, frame):
            logger.info(f"Received signal {signal.Signals(signum).name}")
            self.trigger()

        previous: Dict[int, object] = {}
        try:
            for signum in signals:
                previous[signum] = signal.signal(signum, handler)
            yield self
        finally:
            for signum, old_handler in previous.items():
                signal.signal(signum, old_handler)  # type: ignore[arg-type]


# Process-wide source used when no other one is injected
default_source = CancellationSource()
