"""Progress fan-out.

``ProgressReporter`` delivers every ``ProgressEvent`` to zero or more
observers.  Observers may be plain callables or coroutine functions.  Each
delivery is bounded by a timeout, plain callables run in a worker thread, and
any observer error is logged and dropped, so a misbehaving observer can never
stall or break the pipeline.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Union

from premiumgen.orchestrator.models import ProgressEvent
from premiumgen.utils import print_warning

ProgressObserver = Callable[[ProgressEvent], Union[Awaitable[Any], Any]]


def _is_async(observer: ProgressObserver) -> bool:
    return inspect.iscoroutinefunction(observer) or inspect.iscoroutinefunction(
        getattr(observer, "__call__", None)
    )


def _observer_name(observer: ProgressObserver) -> str:
    return getattr(observer, "__qualname__", None) or type(observer).__name__


class ProgressReporter:
    """Periodic fan-out sink for progress events.

    Attributes:
        timeout: Seconds a single observer may take per event.
        failures: Number of observer calls that raised or timed out.
    """

    def __init__(
        self,
        observers: Iterable[ProgressObserver] = (),
        timeout: float = 5.0,
    ) -> None:
        self._observers: list[ProgressObserver] = list(observers)
        self.timeout = timeout
        self.failures = 0

    @property
    def observers(self) -> tuple[ProgressObserver, ...]:
        return tuple(self._observers)

    def subscribe(self, observer: ProgressObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    async def publish(self, event: ProgressEvent) -> None:
        """Deliver *event* to every observer concurrently."""
        if not self._observers:
            return
        await asyncio.gather(*(self._deliver(observer, event) for observer in self.observers))

    async def _deliver(self, observer: ProgressObserver, event: ProgressEvent) -> None:
        try:
            if _is_async(observer):
                await asyncio.wait_for(observer(event), timeout=self.timeout)
            else:
                await asyncio.wait_for(asyncio.to_thread(observer, event), timeout=self.timeout)
        except asyncio.TimeoutError:
            self.failures += 1
            print_warning(
                f"  Progress observer {_observer_name(observer)} timed out after {self.timeout}s"
            )
        except Exception as exc:  # noqa: BLE001
            self.failures += 1
            print_warning(f"  Progress observer {_observer_name(observer)} failed: {exc}")
