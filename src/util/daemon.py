import threading
from typing import Callable
from src.util.logger import log

class Daemon:
    def __init__(self, reconcile: Callable[[], object], interval_seconds: int):
        self.reconcile = reconcile
        self.interval_seconds = interval_seconds
        self._stop = threading.Event()

    def run_once(self) -> bool:
        try:
            self.reconcile()
            return True
        except Exception as e:
            log(f"Error during reconciliation: {e}", "ERROR")
            return False

    def start(self):
        log(f"Starting lifecycle loop, interval {self.interval_seconds}s")
        self.run_once()
        while not self._stop.wait(self.interval_seconds):
            self.run_once()
        log("Lifecycle loop stopped")

    def stop(self):
        self._stop.set()
