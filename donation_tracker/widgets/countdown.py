from datetime import datetime, timezone
import logging

from PyQt5.QtCore import pyqtSignal, Qt, QTimer
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import QGridLayout, QLabel, QVBoxLayout, QWidget

from .mixins import (
    SaveSizeAndPositionOnClose,
    ControllableBackgroundAndTextColour,
    HideTitleBarOptional,
)
from ..common import format_time_remaining
from ..settings import DEFAULT_FONT
from ..timeleft import compute_time_remaining
from ..types import EXPIRED


class Countdown(
    SaveSizeAndPositionOnClose,
    ControllableBackgroundAndTextColour,
    HideTitleBarOptional,
    QWidget,
):
    """Show the time left until the campaign deadline, ticking once a second.

    The timer only runs while the window is visible and a deadline is set,
    and stops for good once the deadline has passed.
    """

    refresh_interval = 1000
    event_finish = pyqtSignal()

    units = [
        ("years", "Years"),
        ("days", "Days"),
        ("hours", "Hours"),
        ("minutes", "Minutes"),
        ("seconds", "Seconds"),
    ]

    def __init__(self, parent=None, clock=None):
        super().__init__(parent=parent)

        self.setWindowTitle("Time Left")
        self._deadline = None
        self.remaining = None
        self.clock = clock or (lambda: datetime.now(timezone.utc))

        self.title = QLabel("Time Left")
        self.title.setFont(QFont(DEFAULT_FONT, 24, QFont.Bold))
        self.title.setAlignment(Qt.AlignCenter)

        self.finished_label = QLabel("FINISHED!")
        self.finished_label.setFont(QFont(DEFAULT_FONT, 72))
        self.finished_label.setAlignment(Qt.AlignCenter)
        self.finished_label.hide()

        self.grid = QGridLayout()
        self.value_labels = {}
        self.unit_labels = {}
        for column, (field, caption) in enumerate(self.units):
            value_label = QLabel("...")
            value_label.setFont(QFont(DEFAULT_FONT, 48))
            value_label.setAlignment(Qt.AlignCenter)
            unit_label = QLabel(caption)
            unit_label.setFont(QFont(DEFAULT_FONT, 14))
            unit_label.setAlignment(Qt.AlignCenter)

            self.grid.addWidget(value_label, 0, column)
            self.grid.addWidget(unit_label, 1, column)
            self.value_labels[field] = value_label
            self.unit_labels[field] = unit_label

        self.layout = QVBoxLayout()
        self.layout.addWidget(self.title)
        self.layout.addLayout(self.grid)
        self.layout.addWidget(self.finished_label)
        self.setLayout(self.layout)
        self.show_years(False)

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.refresh_time)

    @property
    def deadline(self):
        return self._deadline

    @deadline.setter
    def deadline(self, deadline):
        if deadline and not deadline.tzinfo:
            logging.warning("Provided deadline was not time-zone aware.")
            deadline = deadline.astimezone()
        if deadline == self._deadline:
            return

        self._deadline = deadline
        logging.info(f"Set deadline to {deadline}")
        self.remaining = None
        self.finished_label.hide()
        for label in self.value_labels.values():
            label.show()
        for label in self.unit_labels.values():
            label.show()
        self.show_years(False)
        self.consider_starting()

    def consider_starting(self):
        if self.deadline is None:
            self.timer.stop()
            return
        if self.isVisible() and not self.timer.isActive():
            self.refresh_time()
            if self.remaining is not EXPIRED:
                self.timer.start(self.refresh_interval)

    def refresh_time(self):
        if self.deadline is None:
            return

        remaining = compute_time_remaining(self.deadline, self.clock())
        if remaining is EXPIRED:
            self.timer.stop()
            if self.remaining is not EXPIRED:
                self.remaining = EXPIRED
                self.show_finished()
                self.event_finish.emit()
            return

        self.remaining = remaining
        self.show_years(bool(remaining.years))
        for field, label in self.value_labels.items():
            label.setText(str(int(getattr(remaining, field))))
        self.setToolTip(format_time_remaining(remaining))

    def show_years(self, visible):
        self.value_labels["years"].setVisible(visible)
        self.unit_labels["years"].setVisible(visible)

    def show_finished(self):
        for label in self.value_labels.values():
            label.hide()
        for label in self.unit_labels.values():
            label.hide()
        self.finished_label.show()
        self.setToolTip(format_time_remaining(EXPIRED))

    def showEvent(self, event):
        super().showEvent(event)
        self.consider_starting()

    def hideEvent(self, event):
        self.timer.stop()
        super().hideEvent(event)

    def closeEvent(self, event):
        self.timer.stop()
        super().closeEvent(event)
