from __future__ import annotations

import time
from threading import Event
from typing import Optional


class CancelledError(RuntimeError):
    def __init__(self, message: str = "AI computation canceled.") -> None:
        super().__init__(message)


class SearchTimeout(CancelledError):
    def __init__(self, message: str = "AI computation ran past its time limit.") -> None:
        super().__init__(message)


def deadline_after(time_limit_ms: Optional[int]) -> Optional[float]:
    if time_limit_ms is None:
        return None
    return time.perf_counter() + time_limit_ms / 1000.0


def raise_if_cancelled(cancel_event: Optional[Event], deadline: Optional[float] = None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise CancelledError()
    if deadline is not None and time.perf_counter() >= deadline:
        raise SearchTimeout()
