import threading
from typing import List, Optional, Tuple


class Tally:
    """
    Counts completions of a fixed number of planned requests. Safe to update from any thread.

    :param planned: how many requests will complete eventually
    """

    def __init__(self, planned: int):
        assert planned >= 0, f"planned must be non-negative, got {planned}"
        self.planned = planned
        self._outstanding = planned
        self._succeeded = 0
        self._latencies: List[float] = []
        self._lock = threading.Lock()

    def record_completion(self, success: bool, latency: Optional[float] = None) -> bool:
        """
        Register one completed request.

        :param latency: time the request took, in seconds, if known
        :returns: True for the completion that leaves no outstanding requests, False otherwise
        :raises RuntimeError: if more requests complete than were planned
        """
        with self._lock:
            if self._outstanding <= 0:
                raise RuntimeError(f"All {self.planned} planned requests have already completed")
            self._outstanding -= 1
            if success:
                self._succeeded += 1
            if latency is not None:
                self._latencies.append(latency)
            return self._outstanding == 0

    @property
    def finished(self) -> bool:
        with self._lock:
            return self._outstanding == 0

    def snapshot(self) -> Tuple[int, int, List[float]]:
        """:returns: (completed, succeeded, latencies) as of now"""
        with self._lock:
            return self.planned - self._outstanding, self._succeeded, list(self._latencies)

    def __repr__(self):
        completed, succeeded, _ = self.snapshot()
        return f"{self.__class__.__name__}(planned={self.planned}, completed={completed}, succeeded={succeeded})"
