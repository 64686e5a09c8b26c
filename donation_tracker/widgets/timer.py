from datetime import datetime

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import QLabel, QVBoxLayout, QWidget

from ..settings import DEFAULT_FONT


RUNNING = "#00a000"
STOPPED = "#c00000"
STRUGGLING = "#606000"


def timestamp():
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


class TimerStatusDisplay(QWidget):
    _colour = None

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.layout = QVBoxLayout()

        self._status = QLabel("Inactive")
        self._status.setFont(QFont(DEFAULT_FONT, 48))
        self._status.setAlignment(Qt.AlignCenter)
        self.layout.addWidget(self._status)

        self._last_check = QLabel("Not yet started")
        self._last_check.setFont(QFont(DEFAULT_FONT, 14))
        self._last_check.setAlignment(Qt.AlignCenter)
        self._last_check.setWordWrap(True)
        self.layout.addWidget(self._last_check)

        self._warning = QLabel("")
        self._warning.setFont(QFont(DEFAULT_FONT, 12))
        self._warning.setAlignment(Qt.AlignCenter)
        self.layout.addWidget(self._warning)

        self.setLayout(self.layout)

    @property
    def colour(self):
        return self._colour

    @colour.setter
    def colour(self, colour):
        self._colour = colour
        self.setStyleSheet(f"color: {colour}")

    @property
    def status(self):
        return self._status.text()

    @status.setter
    def status(self, text):
        self._status.setText(text)

    @property
    def last_check(self):
        return self._last_check.text()

    @last_check.setter
    def last_check(self, text):
        self._last_check.setText(text)

    @property
    def warning(self):
        return self._warning.text()

    @warning.setter
    def warning(self, text):
        self._warning.setText(text)


class StatusDisplayingTimer(QTimer):
    """Refresh timer that reports on the most recent fetch of each feed.

    A failed fetch leaves the previous data in place; the next tick retries it.
    """

    def __init__(self, status_display, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.status_display = status_display
        self.last_success = {}

    def start(self, *args, **kwargs):
        super().start(*args, **kwargs)
        self.status_display.colour = RUNNING
        self.status_display.status = "Running"

    def stop(self, *args, **kwargs):
        super().stop(*args, **kwargs)
        self.status_display.colour = STOPPED
        self.status_display.status = "Stopped!"

    def describe_last_success(self):
        if not self.last_success:
            return "never"
        return ", ".join(
            f"{feed} at {when}" for feed, when in sorted(self.last_success.items())
        )

    def update_last_check(self, feed, skipped=0):
        self.last_success[feed] = timestamp()
        self.status_display.last_check = (
            f"Last loaded: {self.describe_last_success()}"
        )
        if feed == "donations":
            if skipped:
                plural = "row" if skipped == 1 else "rows"
                self.status_display.warning = (
                    f"{skipped} malformed donation {plural} skipped"
                )
            else:
                self.status_display.warning = ""
        if self.isActive():
            self.status_display.status = "Running"
            self.status_display.colour = RUNNING

    def update_failed_check(self, feed, error):
        self.status_display.status = "Attempting to connect"
        self.status_display.last_check = (
            f"Update of {feed} at {timestamp()} failed: {error}. "
            f"Last loaded: {self.describe_last_success()}"
        )
        self.status_display.colour = STRUGGLING
