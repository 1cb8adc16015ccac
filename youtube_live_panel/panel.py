"""
YouTube Live panel: viewer count and live chat for one stream.

Requirements:
  pip install PyQt6 requests
"""

import logging
import os
import sys
import weakref
from typing import Optional, Tuple

from PyQt6 import QtCore, QtWidgets, sip

from youtube_live_panel.api import (
    MAX_COMMENTS,
    NO_CHAT_MESSAGES,
    VIEWERS_PENDING,
    LiveData,
    download_live_data,
)
from youtube_live_panel.scheduler import DEFAULT_INTERVAL_MINUTES, Fetcher, RefreshScheduler

logger = logging.getLogger(__name__)

APP_NAME = "YouTube Live"
LOADING_CHAT = "Loading live chat messages..."
START_AUTO = "Start auto refresh"
STOP_AUTO = "Stop auto refresh"


def _alive(ref: weakref.ref):
    w = ref()
    if w is None or sip.isdeleted(w):
        return None
    return w


class LivePanel(QtWidgets.QWidget):
    def __init__(self, fetch: Fetcher = download_live_data, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle(APP_NAME)
        self.resize(520, 640)

        self.instructions = QtWidgets.QLabel("Enter your live URL and YouTube Data API v3 key.")
        self.instructions.setWordWrap(True)

        # inputs
        self.urlEdit = QtWidgets.QLineEdit()
        self.urlEdit.setPlaceholderText("https://www.youtube.com/watch?v=...")

        self.apiEdit = QtWidgets.QLineEdit()
        self.apiEdit.setEchoMode(QtWidgets.QLineEdit.EchoMode.Password)
        self.apiEdit.setPlaceholderText("Enter your API key…")
        self.apiEdit.setText(os.getenv("YT_API_KEY", ""))

        self.intervalEdit = QtWidgets.QLineEdit(str(DEFAULT_INTERVAL_MINUTES))
        self.intervalEdit.setFixedWidth(120)

        self.refreshBtn = QtWidgets.QPushButton("Refresh now")
        self.refreshBtn.clicked.connect(self.on_refresh)

        self.autoBtn = QtWidgets.QPushButton(START_AUTO)
        self.autoBtn.clicked.connect(self.on_toggle_auto)

        form = QtWidgets.QGridLayout()
        form.addWidget(QtWidgets.QLabel("Live URL:"), 0, 0)
        form.addWidget(self.urlEdit, 0, 1, 1, 3)
        form.addWidget(QtWidgets.QLabel("API key:"), 1, 0)
        form.addWidget(self.apiEdit, 1, 1, 1, 3)
        form.addWidget(QtWidgets.QLabel("Refresh interval (min):"), 2, 0)
        form.addWidget(self.intervalEdit, 2, 1)
        form.addWidget(self.refreshBtn, 2, 2)
        form.addWidget(self.autoBtn, 2, 3)

        # outputs
        self.status = QtWidgets.QLabel("Ready")
        self.status.setWordWrap(True)
        self.status.setStyleSheet("color:#666;")

        self.viewersLabel = QtWidgets.QLabel(VIEWERS_PENDING)
        self.chatHeader = QtWidgets.QLabel("Live chat:")

        self.chatList = QtWidgets.QListWidget()
        self.chatList.addItem(NO_CHAT_MESSAGES)

        lay = QtWidgets.QVBoxLayout(self)
        lay.addWidget(self.instructions)
        lay.addLayout(form)
        lay.addSpacing(6)
        lay.addWidget(self.status)
        lay.addWidget(self.viewersLabel)
        lay.addWidget(self.chatHeader)
        lay.addWidget(self.chatList, 1)

        # Results arrive after the worker finishes; the panel may be gone by then.
        self._statusRef = weakref.ref(self.status)
        self._viewersRef = weakref.ref(self.viewersLabel)
        self._chatRef = weakref.ref(self.chatList)

        self.scheduler = RefreshScheduler(self._read_inputs, fetch=fetch, parent=self)
        self.scheduler.statusChanged.connect(self.set_status)
        self.scheduler.refreshStarted.connect(self.on_refresh_started)
        self.scheduler.dataReady.connect(self.render_live_data)
        self.scheduler.autoRefreshChanged.connect(self.on_auto_refresh_changed)

    def _read_inputs(self) -> Tuple[str, str]:
        return self.apiEdit.text(), self.urlEdit.text()

    # ---------- Actions ----------
    def on_refresh(self):
        self.scheduler.trigger_refresh()

    def on_toggle_auto(self):
        self.scheduler.toggle_auto_refresh(self.intervalEdit.text())

    def on_auto_refresh_changed(self, enabled: bool):
        self.autoBtn.setText(STOP_AUTO if enabled else START_AUTO)

    def on_refresh_started(self):
        self.viewersLabel.setText(VIEWERS_PENDING)
        self.chatList.clear()
        self.chatList.addItem(LOADING_CHAT)

    def render_live_data(self, data: LiveData):
        status = _alive(self._statusRef)
        if status is not None:
            status.setText(data.status_text or "Ready")
            status.setStyleSheet("color:#666;" if data.success else "color:#C0392B;")

        viewers = _alive(self._viewersRef)
        if viewers is not None:
            viewers.setText(data.viewers_text or VIEWERS_PENDING)

        chat = _alive(self._chatRef)
        if chat is not None:
            chat.clear()
            chat.addItems(list(data.comments[:MAX_COMMENTS]) or [NO_CHAT_MESSAGES])

    def set_status(self, text: str, error: bool = False):
        self.status.setText(text)
        self.status.setStyleSheet("color:#C0392B;" if error else "color:#666;")

    # ---------- Lifecycle ----------
    def suspend(self):
        self.scheduler.suspend()

    def showEvent(self, event):
        self.scheduler.resume()
        super().showEvent(event)

    def closeEvent(self, event):
        self.scheduler.shutdown()
        super().closeEvent(event)


def main():
    logging.basicConfig(
        level=logging.DEBUG if os.getenv("YT_LIVE_DEBUG") else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    QtCore.QCoreApplication.setOrganizationName("YouTubeLivePanel")
    QtCore.QCoreApplication.setApplicationName("YouTubeLivePanel")

    app = QtWidgets.QApplication(sys.argv)
    w = LivePanel()
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
