"""
In-flight markers for long-running service requests.
"""
import logging
import threading
from contextlib import contextmanager

from core.errors import OperationInProgressError

logger = logging.getLogger(__name__)


class BusyFlag:
    """
    Marks one kind of request (upload, sign) as in flight.

    The flag is acquired before the request is dispatched and must be
    released on every exit path, success or failure.
    """

    def __init__(self, name: str):
        self.name = name
        self._busy = False
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._busy

    def acquire(self) -> bool:
        """
        Mark the request kind as in flight.

        Returns:
            False if a request of this kind is already in flight
        """
        with self._lock:
            if self._busy:
                logger.debug("%s already in flight", self.name)
                return False
            self._busy = True
            return True

    def release(self) -> None:
        with self._lock:
            self._busy = False

    @contextmanager
    def hold(self):
        """
        Hold the flag for the duration of a block.

        Raises:
            OperationInProgressError: The flag is already held
        """
        if not self.acquire():
            raise OperationInProgressError(f"{self.name} already in progress")
        try:
            yield self
        finally:
            self.release()
