from PyQt5.QtCore import Qt, QRect, QSize
from PyQt5.QtGui import QBrush, QFont, QPainter, QPen
from PyQt5.QtWidgets import QLabel, QVBoxLayout, QWidget

from ..common import format_money, format_pct
from ..settings import DEFAULT_FONT
from .mixins import (
    SaveSizeAndPositionOnClose,
    HideTitleBarOptional,
    ControllableBackgroundAndTextColour,
)


class ProgressBar(QWidget):
    summary = None

    _bar_colour = Qt.green
    _text_colour = Qt.darkGreen

    @property
    def bar_colour(self):
        return self._bar_colour

    @bar_colour.setter
    def bar_colour(self, colour):
        self._bar_colour = colour
        self.update()

    @property
    def text_colour(self):
        return self._text_colour

    @text_colour.setter
    def text_colour(self, colour):
        self._text_colour = colour
        self.update()

    @property
    def fill_fraction(self):
        if not self.summary or self.summary.fraction is None:
            return 0
        return min(float(self.summary.fraction), 1)

    @property
    def caption(self):
        if not self.summary:
            return "Loading..."
        raised, goal, _, _ = self.summary
        if goal is None:
            return f"{format_money(raised)} raised"
        return f"{format_money(raised)} / {format_money(goal)}"

    def minimumSizeHint(self):
        return QSize(0, 100)

    def paintEvent(self, event):
        painter = QPainter(self)

        margin = 20
        bottom_margin = 5
        box_height = int(self.height() - margin - bottom_margin)
        box_width = int(self.width() - margin * 2)

        # Background
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(Qt.white, Qt.SolidPattern))
        painter.drawRect(margin, margin, box_width, box_height)

        # Amount raised so far
        if self.fill_fraction:
            painter.setBrush(QBrush(self.bar_colour, Qt.SolidPattern))
            painter.drawRect(
                margin, margin, int(self.fill_fraction * box_width), box_height
            )

        painter.setPen(self.text_colour)
        painter.setFont(QFont(DEFAULT_FONT, 30))
        painter.drawText(
            QRect(margin, margin, box_width, box_height),
            Qt.AlignCenter,
            self.caption,
        )

        # Outline
        painter.setPen(QPen(Qt.black, 2, Qt.SolidLine))
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(margin, margin, box_width, box_height)


class ProgressBarWindow(
    SaveSizeAndPositionOnClose,
    HideTitleBarOptional,
    ControllableBackgroundAndTextColour,
    QWidget,
):
    _summary = None

    _bar_colour = Qt.green
    _bar_text_colour = Qt.darkGreen

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.resize(512, 150)
        self.setWindowTitle("Donation Progress")

        self.layout = QVBoxLayout()

        self.progress_bar = ProgressBar()
        self.layout.addWidget(self.progress_bar)

        self.donor_count_label = QLabel("")
        self.donor_count_label.setAlignment(Qt.AlignTop | Qt.AlignHCenter)
        self.donor_count_label.setFont(QFont(DEFAULT_FONT, 18))
        self.layout.addWidget(self.donor_count_label)

        self.setLayout(self.layout)

    @property
    def bar_colour(self):
        return self._bar_colour

    @bar_colour.setter
    def bar_colour(self, colour):
        self.progress_bar.bar_colour = colour
        self._bar_colour = colour
        self.update()

    @property
    def bar_text_colour(self):
        return self._bar_text_colour

    @bar_text_colour.setter
    def bar_text_colour(self, colour):
        self.progress_bar.text_colour = colour
        self._bar_text_colour = colour
        self.update()

    @property
    def summary(self):
        return self._summary

    @summary.setter
    def summary(self, summary):
        self._summary = summary
        self.progress_bar.summary = summary

        if summary:
            self.donor_count_label.setText(f"Total donors: {summary.count}")
            self.progress_bar.setToolTip(format_pct(summary.fraction))
        else:
            self.donor_count_label.setText("")
            self.progress_bar.setToolTip("")
        self.progress_bar.update()
