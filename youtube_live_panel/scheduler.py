import logging
import math
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from PyQt6 import QtCore

from youtube_live_panel.api import LiveData, download_live_data
from youtube_live_panel.video_id import extract_video_id

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MINUTES = 1
MAX_TIMER_MS = 2**31 - 1  # QTimer interval is a signed 32-bit int

ALREADY_IN_PROGRESS = "Update already in progress..."
MISSING_INPUTS = "Please provide both the live URL and API key."
NO_VIDEO_ID = "Unable to determine the video ID."
UPDATING = "Updating..."
INVALID_INTERVAL = "Invalid refresh interval. Enter minutes."
NON_POSITIVE_INTERVAL = "The interval must be greater than zero."
INTERVAL_TOO_LONG = "The interval is too long."

Fetcher = Callable[[str, str], LiveData]


@dataclass
class RefreshState:
    request_in_progress: bool = False
    auto_refresh_enabled: bool = False
    shutting_down: bool = False


class WorkerSignals(QtCore.QObject):
    finished = QtCore.pyqtSignal(object)  # LiveData


class FetchWorker(threading.Thread):
    """Runs one fetch off the UI thread and hands the result back via a signal."""

    def __init__(self, api_key: str, video_id: str, fetch: Fetcher, state: RefreshState):
        super().__init__(name=f"live-fetch-{video_id}", daemon=True)
        self.api_key = api_key
        self.video_id = video_id
        self.fetch = fetch
        self.state = state
        self.signals = WorkerSignals()

    def run(self):
        data = LiveData()
        if not self.state.shutting_down:
            try:
                data = self.fetch(self.api_key, self.video_id)
            except Exception as e:
                logger.warning("Live data fetch for %s failed: %s", self.video_id, e)
                data = LiveData(status_text=f"Error: {e}")
        if self.state.shutting_down:
            self.state.request_in_progress = False
            return
        self.signals.finished.emit(data)


class RefreshScheduler(QtCore.QObject):
    """Single-flight refresh plus an optional repeating timer.

    Every public method must be called from the UI thread. Results come back
    through ``dataReady``, delivered on the UI thread as well.
    """

    statusChanged = QtCore.pyqtSignal(str, bool)  # text, is_error
    refreshStarted = QtCore.pyqtSignal()
    dataReady = QtCore.pyqtSignal(object)
    autoRefreshChanged = QtCore.pyqtSignal(bool)

    def __init__(
        self,
        read_inputs: Callable[[], Tuple[str, str]],
        fetch: Fetcher = download_live_data,
        parent: Optional[QtCore.QObject] = None,
    ):
        super().__init__(parent)
        self.read_inputs = read_inputs
        self.fetch = fetch
        self.state = RefreshState()
        self.timer: Optional[QtCore.QTimer] = None
        self.worker: Optional[FetchWorker] = None

    # ---------- Manual refresh ----------
    def trigger_refresh(self) -> bool:
        if self.state.shutting_down:
            return False
        if self.state.request_in_progress:
            self.statusChanged.emit(ALREADY_IN_PROGRESS, False)
            return False

        api_key, url = (s.strip() for s in self.read_inputs())
        if not api_key or not url:
            self.statusChanged.emit(MISSING_INPUTS, True)
            return False

        video_id = extract_video_id(url)
        if not video_id:
            self.statusChanged.emit(NO_VIDEO_ID, True)
            return False

        self.state.request_in_progress = True
        self.statusChanged.emit(UPDATING, False)
        self.refreshStarted.emit()

        if self.worker is not None:
            self.worker.join()

        worker = FetchWorker(api_key, video_id, self.fetch, self.state)
        worker.signals.finished.connect(self._on_worker_finished)
        self.worker = worker
        logger.debug("Refreshing live data for %s", video_id)
        worker.start()
        return True

    @QtCore.pyqtSlot(object)
    def _on_worker_finished(self, data: LiveData):
        self.state.request_in_progress = False
        if self.state.shutting_down:
            return
        self.dataReady.emit(data)

    # ---------- Auto refresh ----------
    def start_auto_refresh(self, interval_text: str) -> bool:
        txt = (interval_text or "").strip() or str(DEFAULT_INTERVAL_MINUTES)
        try:
            minutes = float(txt)
        except ValueError:
            self.statusChanged.emit(INVALID_INTERVAL, True)
            return False
        if not math.isfinite(minutes):
            self.statusChanged.emit(INVALID_INTERVAL, True)
            return False
        if minutes <= 0:
            self.statusChanged.emit(NON_POSITIVE_INTERVAL, True)
            return False
        interval_ms = max(1, int(minutes * 60 * 1000))
        if interval_ms > MAX_TIMER_MS:
            self.statusChanged.emit(INTERVAL_TOO_LONG, True)
            return False

        self._drop_timer()
        self.state.auto_refresh_enabled = True
        self.timer = QtCore.QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self._on_timeout)
        self.timer.start()
        logger.info("Auto refresh every %d ms", interval_ms)
        self.autoRefreshChanged.emit(True)
        self.trigger_refresh()
        return True

    def stop_auto_refresh(self):
        self.state.auto_refresh_enabled = False
        self._drop_timer()
        self.autoRefreshChanged.emit(False)

    def toggle_auto_refresh(self, interval_text: str) -> bool:
        if self.state.auto_refresh_enabled:
            self.stop_auto_refresh()
            return False
        return self.start_auto_refresh(interval_text)

    def on_timer(self) -> bool:
        """Timer tick. Returns whether the timer should keep firing."""
        if not self.state.auto_refresh_enabled or self.state.shutting_down:
            return False
        self.trigger_refresh()
        return self.state.auto_refresh_enabled

    def _on_timeout(self):
        if not self.on_timer():
            self._drop_timer()

    def _drop_timer(self):
        if self.timer is not None:
            self.timer.stop()
            self.timer.deleteLater()
            self.timer = None

    # ---------- Lifecycle ----------
    def suspend(self):
        self.stop_auto_refresh()

    def shutdown(self):
        """Stop the timer and block until the in-flight fetch, if any, ends."""
        self.state.shutting_down = True
        self.stop_auto_refresh()
        if self.worker is not None:
            self.worker.join()
            self.worker = None
        self.state.request_in_progress = False

    def resume(self):
        """Allow refreshes again after ``shutdown``; a closed Qt window can be shown again."""
        self.state.shutting_down = False
