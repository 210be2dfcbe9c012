import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class GameTimer:
    """Background 1 Hz tick source for a speedrun session."""

    def __init__(self, session, interval: float = 1.0):
        self.session = session
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking if not already running."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        logger.info(f"[SPEEDRUN] Timer started ({self.session.time_remaining}s)")

    def _run(self) -> None:
        while not self.session.is_game_over:
            if self._stop_event.wait(self.interval):
                return
            self.session.tick()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
