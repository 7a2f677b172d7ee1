from collections import defaultdict
from collections import deque
from collections.abc import Callable
from threading import RLock
from time import monotonic

from fastapi import Request


class UploadBudget:
    """Per-client allowance of uploaded image bytes over a sliding window.

    Each preview request is charged the size of its body, so a client sending
    large images runs out sooner than one sending small ones.
    """

    def __init__(
        self,
        max_bytes: int,
        window_seconds: int,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self.max_bytes = max(1, max_bytes)
        self.window_seconds = max(1, window_seconds)
        self._clock = clock
        self._charges: dict[str, deque[tuple[float, int]]] = defaultdict(deque)
        self._spent: dict[str, int] = defaultdict(int)
        self._lock = RLock()

    def charge(self, client: str, size: int) -> int | None:
        """Record an upload of `size` bytes for `client`.

        Returns None when the upload fits the budget, otherwise the number of
        seconds until enough of the window has expired for it to fit.
        """

        now = self._clock()
        with self._lock:
            charges = self._charges[client]
            while charges and charges[0][0] <= now - self.window_seconds:
                _, expired = charges.popleft()
                self._spent[client] -= expired

            if self._spent[client] + size > self.max_bytes:
                return self._retry_after(client, size, now)

            charges.append((now, size))
            self._spent[client] += size
            return None

    def _retry_after(self, client: str, size: int, now: float) -> int:
        # Walk the oldest charges until dropping them frees enough room.
        needed = self._spent[client] + size - self.max_bytes
        for charged_at, charged in self._charges[client]:
            needed -= charged
            if needed <= 0:
                return max(1, int(charged_at + self.window_seconds - now) + 1)
        # The upload alone exceeds the budget; it will never fit.
        return self.window_seconds


def client_key(request: Request) -> str:
    """Identify the caller, preferring the first X-Forwarded-For hop."""

    forwarded_for = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else "unknown"
