"""Long-polling update pump.

:class:`UpdatePoller` runs ``getUpdates`` in a background thread, advances
the offset past every delivered update and republishes updates onto a
bounded :class:`UpdatesChannel`.  A full channel blocks the pump, which in
turn delays the next fetch.
"""

from __future__ import annotations

import collections
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Callable, Deque, Iterator, List, Optional

import requests

from botapi.exceptions import BotAPIError
from botapi.log import DebugLog
from botapi.methods import GetUpdates
from botapi.models import Update

logger = logging.getLogger("botapi.polling")

MAX_LIMIT = 100


class UpdatesChannel:
    """A bounded, closable FIFO of updates.

    Iterating yields updates until the channel is closed and drained.
    """

    def __init__(self, maxsize: int) -> None:
        self.maxsize = maxsize
        self._items: Deque[Update] = collections.deque()
        self._cond = threading.Condition()
        self._closed = False

    def put(self, update: Update) -> bool:
        """Append *update*, blocking while full. Returns False once closed."""
        with self._cond:
            while len(self._items) >= self.maxsize and not self._closed:
                self._cond.wait()
            if self._closed:
                return False
            self._items.append(update)
            self._cond.notify_all()
            return True

    def get(self, timeout: Optional[float] = None) -> Optional[Update]:
        """Pop the oldest update.

        Returns ``None`` when the channel is closed and empty.

        Raises:
            queue.Empty: Nothing arrived within *timeout* seconds.
        """
        with self._cond:
            if not self._cond.wait_for(lambda: self._items or self._closed, timeout):
                raise queue.Empty
            if not self._items:
                return None
            update = self._items.popleft()
            self._cond.notify_all()
            return update

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def clear(self) -> None:
        """Discard every buffered update."""
        with self._cond:
            self._items.clear()
            self._cond.notify_all()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def __iter__(self) -> Iterator[Update]:
        while True:
            update = self.get()
            if update is None:
                return
            yield update


@dataclass
class RetryPolicy:
    """How the pump waits after a failed fetch.

    The default retries forever every 3 seconds.  ``backoff`` multiplies the
    delay after each consecutive failure, capped at ``max_delay``; the pump
    gives up after ``max_attempts`` consecutive failures when it is set.
    """

    delay: float = 3.0
    backoff: float = 1.0
    max_delay: float = 60.0
    max_attempts: Optional[int] = None

    def delay_for(self, attempt: int) -> float:
        return min(self.delay * self.backoff ** max(attempt - 1, 0), self.max_delay)

    def exhausted(self, attempt: int) -> bool:
        return self.max_attempts is not None and attempt >= self.max_attempts


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None or limit < 1 or limit > MAX_LIMIT:
        return MAX_LIMIT
    return limit


class UpdatePoller:
    """Background ``getUpdates`` loop feeding :attr:`updates`.

    Args:
        fetch: Executes a :class:`GetUpdates` request and returns the updates.
        request: Initial offset, limit, timeout and allowed updates.
        retry: Policy applied after every failed fetch, expected or not.
        debug_log: Receives a line per failure when given.
    """

    def __init__(
        self,
        fetch: Callable[[GetUpdates], List[Update]],
        request: Optional[GetUpdates] = None,
        retry: Optional[RetryPolicy] = None,
        debug_log: Optional[DebugLog] = None,
    ) -> None:
        request = request or GetUpdates()
        self.limit = clamp_limit(request.limit)
        self.request = request.model_copy(update={"limit": self.limit})
        self.offset = request.offset or 0
        self.retry = retry or RetryPolicy()
        self.updates = UpdatesChannel(self.limit)
        self.last_error: Optional[BaseException] = None
        self._fetch = fetch
        self._debug_log = debug_log
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> UpdatesChannel:
        if self._thread is not None:
            raise RuntimeError("update poller already started")
        self._thread = threading.Thread(target=self._run, name="botapi-updates", daemon=True)
        self._thread.start()
        return self.updates

    def stop(self) -> None:
        """Signal the loop to end; the channel closes and buffered updates stay readable."""
        self._stop.set()
        self.updates.close()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        failures = 0
        try:
            while not self._stop.is_set():
                request = self.request.model_copy(update={"offset": self.offset})
                try:
                    updates = self._fetch(request)
                except (requests.RequestException, BotAPIError) as exc:
                    failures += 1
                    if not self._back_off(exc, failures):
                        return
                    continue
                except Exception as exc:
                    failures += 1
                    logger.exception(
                        "Unexpected error while getting updates",
                        extra={"api_endpoint": "getUpdates", "attempt": failures},
                    )
                    if not self._back_off(exc, failures):
                        return
                    continue

                failures = 0
                for update in updates:
                    if update.update_id < self.offset:
                        continue
                    self.offset = update.update_id + 1
                    if self._stop.is_set() or not self.updates.put(update):
                        return
        finally:
            self.updates.close()
            logger.debug("Update poller stopped", extra={"offset": self.offset})

    def _back_off(self, exc: BaseException, failures: int) -> bool:
        """Record *exc* and wait out the retry delay. False means give up."""
        self.last_error = exc
        if self.retry.exhausted(failures):
            logger.error(
                "Failed to get updates, giving up",
                extra={"api_endpoint": "getUpdates", "error": str(exc), "attempt": failures},
            )
            return False
        delay = self.retry.delay_for(failures)
        logger.error(
            "Failed to get updates, retrying in %g seconds...",
            delay,
            extra={"api_endpoint": "getUpdates", "error": str(exc), "attempt": failures},
        )
        if self._debug_log is not None:
            self._debug_log.write(f"Failed to get updates, retrying in {delay:g} seconds...: {exc}")
        self._stop.wait(delay)
        return True
