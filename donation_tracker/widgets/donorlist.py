from itertools import zip_longest

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont, QFontMetrics, QPainter
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from .mixins import (
    SaveSizeAndPositionOnClose,
    ControllableBackgroundAndTextColour,
    HideTitleBarOptional,
)
from ..aggregate import amount_range, by_recency, by_tier, visible_tiers
from ..common import format_date, format_donation, format_money
from ..settings import DEFAULT_FONT
from ..types import TIERS


class ElidingLabel(QLabel):
    def paintEvent(self, event):
        painter = QPainter(self)
        metrics = QFontMetrics(self.font())
        elided = metrics.elidedText(self.text(), Qt.ElideRight, self.width())
        painter.drawText(self.rect(), self.alignment(), elided)


class SingleDonation(QWidget):
    _donation = None

    def __init__(self, show_date=True, font_size=24, parent=None):
        super().__init__(parent=parent)

        self.layout = QHBoxLayout()
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.date = QLabel("")
        self.date.setFont(QFont(DEFAULT_FONT, font_size))
        self.date.setVisible(show_date)
        self.name = ElidingLabel("")
        self.name.setFont(QFont(DEFAULT_FONT, font_size))
        self.name.setMinimumWidth(50)
        self.amount = QLabel("")
        self.amount.setFont(QFont(DEFAULT_FONT, font_size))
        self.amount.setAlignment(Qt.AlignVCenter | Qt.AlignRight)

        self.layout.addWidget(self.date)
        self.layout.addWidget(self.name, stretch=1)
        self.layout.addWidget(self.amount)

        self.setLayout(self.layout)

    @property
    def donation(self):
        return self._donation

    @donation.setter
    def donation(self, donation):
        self._donation = donation
        if donation is None:
            self.date.setText("")
            self.name.setText("")
            self.amount.setText("")
            return

        self.date.setText(format_date(donation.date))
        self.name.setText(format_donation(donation))
        self.amount.setText(format_money(donation.amount))


class DonorList(
    SaveSizeAndPositionOnClose,
    ControllableBackgroundAndTextColour,
    HideTitleBarOptional,
    QWidget,
):
    """The most recent donations, newest first."""

    _donations = None
    layout = None

    def __init__(self, num_donors=10, parent=None):
        super().__init__(parent=parent)

        self.resize(400, 250)
        self.num_donors = num_donors
        self.setWindowTitle("Recent Donations")

    @property
    def num_donors(self):
        return self._num_donors

    @num_donors.setter
    def num_donors(self, num_donors):
        self._num_donors = num_donors
        self.set_up_widgets(num_donors)

    def set_up_widgets(self, num_donors):
        if isinstance(self.layout, QVBoxLayout):
            # Reparent the old layout so this widget can take a new one
            QWidget().setLayout(self.layout)

        self.layout = QVBoxLayout()
        self.layout.setSpacing(0)
        self.layout.setContentsMargins(10, 0, 10, 0)

        self.donation_widgets = []
        for _ in range(num_donors):
            donation_widget = SingleDonation()
            self.donation_widgets.append(donation_widget)
            self.layout.addWidget(donation_widget)

        self.setLayout(self.layout)
        if self.donations:
            self.donations = self.donations

    @property
    def donations(self):
        return self._donations

    @donations.setter
    def donations(self, donations):
        self._donations = donations
        recent = by_recency(donations)[: len(self.donation_widgets)]
        for donation, donation_widget in zip_longest(recent, self.donation_widgets):
            donation_widget.donation = donation


class TierColumn(QWidget):
    def __init__(self, tier, parent=None):
        super().__init__(parent=parent)
        self.tier = tier

        self.layout = QVBoxLayout()
        self.layout.setAlignment(Qt.AlignTop)

        heading = QHBoxLayout()
        self.label = QLabel(tier.label)
        self.label.setFont(QFont(DEFAULT_FONT, 24))
        if tier.colour:
            self.label.setStyleSheet(f"color: {tier.colour};")
        heading.addWidget(self.label, stretch=1)

        self.details = QLabel(f"({tier.details})")
        self.details.setFont(QFont(DEFAULT_FONT, 12))
        self.details.setAlignment(Qt.AlignBottom | Qt.AlignRight)
        heading.addWidget(self.details)
        self.layout.addLayout(heading)

        self.rows = QVBoxLayout()
        self.rows.setSpacing(0)
        self.layout.addLayout(self.rows)

        self.setLayout(self.layout)
        self.donation_widgets = []

    @property
    def donations(self):
        return [widget.donation for widget in self.donation_widgets]

    @donations.setter
    def donations(self, donations):
        for widget in self.donation_widgets:
            self.rows.removeWidget(widget)
            widget.deleteLater()

        self.donation_widgets = []
        for donation in donations:
            widget = SingleDonation(show_date=False, font_size=14)
            widget.donation = donation
            self.donation_widgets.append(widget)
            self.rows.addWidget(widget)

        self.label.setText(f"{self.tier.label} ({len(donations)})")


class TierList(
    SaveSizeAndPositionOnClose,
    ControllableBackgroundAndTextColour,
    HideTitleBarOptional,
    QWidget,
):
    """Donations grouped into tiers, one column per tier, largest first."""

    _donations = None

    def __init__(self, tiers=TIERS, parent=None):
        super().__init__(parent=parent)

        self.resize(800, 300)
        self.setWindowTitle("Donations by Tier")

        self.layout = QHBoxLayout()
        self.columns = {}
        for tier in tiers:
            column = TierColumn(tier)
            self.columns[tier] = column
            self.layout.addWidget(column)
        self.setLayout(self.layout)

    @property
    def donations(self):
        return self._donations

    @donations.setter
    def donations(self, donations):
        self._donations = donations

        tiers = list(self.columns)
        shown = visible_tiers(tiers, amount_range(donations))
        for tier, members in by_tier(donations, tiers).items():
            column = self.columns[tier]
            column.donations = members
            column.setVisible(tier in shown)
