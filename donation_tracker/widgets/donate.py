from PyQt5.QtCore import Qt, QUrl
from PyQt5.QtGui import QDesktopServices, QFont
from PyQt5.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QLabel,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..common import paypal_url, venmo_url
from ..settings import DEFAULT_FONT


class DonateDialog(QDialog):
    """Ways to give: PayPal, Venmo, Zelle, or cash and cheques by post."""

    _config = None

    def __init__(self, parent=None):
        super().__init__(parent=parent)

        self.setWindowTitle("Donate")
        self.setMinimumWidth(400)
        self.layout = QVBoxLayout()

        self.paypal_button = QPushButton("PayPal", self)
        self.paypal_button.clicked.connect(self.open_paypal)
        self.layout.addWidget(self.paypal_button)

        self.venmo_button = QPushButton("Venmo", self)
        self.venmo_button.clicked.connect(self.open_venmo)
        self.layout.addWidget(self.venmo_button)

        self.zelle_button = QPushButton("Zelle", self)
        self.zelle_button.clicked.connect(self.show_zelle)
        self.layout.addWidget(self.zelle_button)

        self.mail_button = QPushButton("Cash / Check", self)
        self.mail_button.clicked.connect(self.toggle_mailing_info)
        self.layout.addWidget(self.mail_button)

        self.mailing_info = QWidget(self)
        mailing_layout = QVBoxLayout()
        heading = QLabel("Mailing Information")
        heading.setFont(QFont(DEFAULT_FONT, 18))
        mailing_layout.addWidget(heading)
        mailing_layout.addWidget(QLabel("Please send cash / checks to:"))
        self.mailing_address = QLabel("")
        self.mailing_address.setTextInteractionFlags(Qt.TextSelectableByMouse)
        mailing_layout.addWidget(self.mailing_address)
        self.mailing_info.setLayout(mailing_layout)
        self.mailing_info.hide()
        self.layout.addWidget(self.mailing_info)

        self.buttonbox = QDialogButtonBox(QDialogButtonBox.Close)
        self.buttonbox.rejected.connect(self.reject)
        self.layout.addWidget(self.buttonbox)

        self.setLayout(self.layout)
        self.config = None

    @property
    def config(self):
        return self._config

    @config.setter
    def config(self, config):
        self._config = config
        loaded = config is not None
        self.paypal_button.setEnabled(loaded and bool(config.paypal_email))
        self.venmo_button.setEnabled(loaded and bool(config.venmo_user))
        self.zelle_button.setEnabled(loaded and bool(config.zelle_email))
        self.mail_button.setEnabled(loaded and bool(config.mailing_address))
        self.mailing_address.setText(config.mailing_address if loaded else "")

    def open_url(self, url):
        QDesktopServices.openUrl(QUrl(url))

    def open_paypal(self):
        self.open_url(paypal_url(self.config.paypal_email))

    def open_venmo(self):
        self.open_url(venmo_url(self.config.venmo_user))

    def show_zelle(self):
        QMessageBox.information(
            self, "Zelle", f"Send your Zelle payment to {self.config.zelle_email}"
        )

    def toggle_mailing_info(self):
        self.mailing_info.setVisible(self.mailing_info.isHidden())


class MoreInfoDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent=parent)

        self.setWindowTitle("More Info")
        self.setMinimumWidth(600)
        self.layout = QVBoxLayout()

        self.text = QLabel("Loading...")
        self.text.setWordWrap(True)
        self.text.setTextFormat(Qt.PlainText)
        self.text.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.layout.addWidget(self.text)

        self.buttonbox = QDialogButtonBox(QDialogButtonBox.Close)
        self.buttonbox.rejected.connect(self.reject)
        self.layout.addWidget(self.buttonbox)

        self.setLayout(self.layout)

    @property
    def more_info(self):
        return self.text.text()

    @more_info.setter
    def more_info(self, more_info):
        self.text.setText(more_info)
