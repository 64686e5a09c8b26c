from functools import partial
from itertools import count
import logging
import sys

from PyQt5.QtCore import Qt, QSettings, QThreadPool
from PyQt5.QtGui import QColor, QFont
from PyQt5.QtWidgets import (
    QAction,
    QApplication,
    QColorDialog,
    QDesktopWidget,
    QInputDialog,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .aggregate import summarise
from .feeds import FeedGetter, fake_get_config, fake_get_donations
from .settings import (
    DEFAULT_CONFIG_URL,
    DEFAULT_DONATIONS_URL,
    DEFAULT_FONT,
    DEFAULT_REFRESH_INTERVAL,
    MINIMUM_REFRESH_INTERVAL,
)

from .widgets.countdown import Countdown
from .widgets.donate import DonateDialog, MoreInfoDialog
from .widgets.donorlist import DonorList, TierList
from .widgets.progressbar import ProgressBarWindow
from .widgets.timer import StatusDisplayingTimer, TimerStatusDisplay


class ShowButton(QPushButton):
    def __init__(self, caption, parent, target):
        super().__init__(caption, parent)
        self.target = target
        self.clicked.connect(self.target.show)


class DonationTracker(QMainWindow):
    """The control window: owns the loaded feeds and every display window.

    `donations` and `config` stay None until their feed first loads, and each
    is only ever written by its own fetch.
    """

    donations = None
    skipped = 0
    config = None
    key = "mainWindow"

    def __init__(self, debug=False, settings=None, parent=None):
        super().__init__(parent)

        self.setWindowTitle("Donation Tracker")

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)

        self.progress_bar = ProgressBarWindow()
        self.countdown = Countdown()
        self.donor_list = DonorList()
        self.tier_list = TierList()
        self.donate_dialog = DonateDialog(parent=self)
        self.more_info_dialog = MoreInfoDialog(parent=self)

        self.layout = QVBoxLayout()

        self.timer_status_display = TimerStatusDisplay()
        self.layout.addWidget(self.timer_status_display)

        self.donate_button = QPushButton("Donate Now", self)
        self.donate_button.setFont(QFont(DEFAULT_FONT, 24))
        self.donate_button.clicked.connect(self.donate_dialog.exec_)
        self.layout.addWidget(self.donate_button)

        self.more_info_button = QPushButton("More Info", self)
        self.more_info_button.clicked.connect(self.more_info_dialog.exec_)
        self.layout.addWidget(self.more_info_button)

        for widget, caption in self.windows():
            button = ShowButton(caption, self, widget)
            self.layout.addWidget(button)

        self.central_widget.setLayout(self.layout)

        self.menu_bar = self.menuBar()

        self.file_menu()
        if debug:
            logging.debug("Enabling debug menu")
            self.debug_menu()

        self.init_timers()
        self.init_settings(settings)
        self.init_colours()

        self.countdown.event_finish.connect(
            lambda: logging.info("The campaign deadline has passed.")
        )

        self.refresh_views()

    def windows(self):
        return [
            (self.progress_bar, "Progress bar"),
            (self.countdown, "Countdown"),
            (self.donor_list, "Recent donations"),
            (self.tier_list, "Donations by tier"),
        ]

    def init_timers(self):
        self.thread_pool = QThreadPool()

        # Fetches can overlap, so only a result newer than the last one applied
        # for its feed is used.
        self.fetch_numbers = count(1)
        self.applied_fetch = {"donations": 0, "config": 0}

        self.timer = StatusDisplayingTimer(self.timer_status_display)
        self.timer.timeout.connect(self.start_update_data)

    def init_settings(self, settings=None):
        if settings is None:
            settings = QSettings("donation_tracker", "donation_tracker")
        self.settings = settings
        self.donations_url = self.settings.value(
            "donations_url", defaultValue=DEFAULT_DONATIONS_URL
        )
        self.config_url = self.settings.value(
            "config_url", defaultValue=DEFAULT_CONFIG_URL
        )
        self.timer_interval = max(
            int(
                self.settings.value(
                    "timer_interval", defaultValue=DEFAULT_REFRESH_INTERVAL
                )
            ),
            MINIMUM_REFRESH_INTERVAL,
        )

        for widget, key, default_width, default_height in [
            (self.progress_bar, "bar", 500, 150),
            (self.countdown, "countdown", 500, 200),
            (self.donor_list, "list", 400, 250),
            (self.tier_list, "tiers", 800, 300),
        ]:
            widget.restore_geometry(self.settings, key, default_width, default_height)
            widget.show()

        self.resize(
            int(self.settings.value(f"{self.key}/width", 250)),
            int(self.settings.value(f"{self.key}/height", 400)),
        )

        self.show_hide_title_bars(
            self.settings.value("hide_title_bars", False, type=bool)
        )
        self.donor_list.num_donors = int(
            self.settings.value("donor_list/num_donors", 10)
        )

        if self.donations_url or self.config_url:
            self.pause(force_resume=True)

    def file_menu(self):
        self.file_sub_menu = self.menu_bar.addMenu("Options")

        self.set_donations_url_action = QAction("Set donations feed URL", self)
        self.set_donations_url_action.setStatusTip(
            "Pick the published CSV that lists donations."
        )
        self.set_donations_url_action.setShortcut("CTRL+U")
        self.set_donations_url_action.triggered.connect(
            lambda: self.set_url("donations")
        )

        self.set_config_url_action = QAction("Set campaign feed URL", self)
        self.set_config_url_action.setStatusTip(
            "Pick the published CSV holding the goal, deadline and payment details."
        )
        self.set_config_url_action.triggered.connect(lambda: self.set_url("config"))

        self.pause_action = QAction("Pause", self)
        self.pause_action.setStatusTip("Pause/resume refreshing the feeds")
        self.pause_action.setShortcut("CTRL+P")
        self.pause_action.triggered.connect(self.pause)

        self.refresh_time_action = QAction("Set refresh time", self)
        self.refresh_time_action.setStatusTip(
            "Set the amount of time to wait between updates."
        )
        self.refresh_time_action.setShortcut("CTRL+R")
        self.refresh_time_action.triggered.connect(self.set_refresh_time)

        self.num_donors_action = QAction("Set number of donations", self)
        self.num_donors_action.setStatusTip(
            "Set the number of recent donations to display"
        )
        self.num_donors_action.setShortcut("CTRL+N")
        self.num_donors_action.triggered.connect(self.set_num_donors)

        self.hide_title_bars_action = QAction("Hide title bars", self)
        self.hide_title_bars_action.setStatusTip(
            "Hide the title bars of the windows intended to be streamed"
        )
        self.hide_title_bars_action.setShortcut("CTRL+B")
        self.hide_title_bars_action.triggered.connect(
            lambda: self.show_hide_title_bars(hide=True)
        )

        self.show_title_bars_action = QAction("Show title bars", self)
        self.show_title_bars_action.setStatusTip(
            "Show the title bars of the windows intended to be streamed"
        )
        self.show_title_bars_action.setShortcut("CTRL+B")
        self.show_title_bars_action.setVisible(False)
        self.show_title_bars_action.triggered.connect(
            lambda: self.show_hide_title_bars(hide=False)
        )

        self.exit_action = QAction("Exit Application", self)
        self.exit_action.setStatusTip("Exit the application.")
        self.exit_action.setShortcut("CTRL+Q")
        self.exit_action.triggered.connect(lambda: QApplication.quit())

        for action in (
            self.set_donations_url_action,
            self.set_config_url_action,
            self.pause_action,
            self.refresh_time_action,
            self.num_donors_action,
            self.hide_title_bars_action,
            self.show_title_bars_action,
            self.exit_action,
        ):
            self.file_sub_menu.addAction(action)

    def init_colours(self):
        self.colour_menu = self.menu_bar.addMenu("Colours")
        self.colour_menu_items = []

        for widget, attrname, text, default in [
            (self.progress_bar, "bar_colour", "progress bar", QColor(Qt.green)),
            (
                self.progress_bar,
                "bar_text_colour",
                "progress bar text",
                QColor(Qt.darkGreen),
            ),
            (
                self.progress_bar,
                "text_colour",
                "donor count text",
                QColor(Qt.white),
            ),
            (self.countdown, "text_colour", "countdown text", QColor(Qt.white)),
            (self.donor_list, "text_colour", "donation list text", QColor(Qt.white)),
            (self.tier_list, "text_colour", "tier list text", QColor(Qt.white)),
        ]:

            def set_colour(checked, widget, attrname, text):
                colour = QColorDialog.getColor(
                    initial=getattr(widget, attrname),
                    parent=self,
                    title=f"Choose {text} colour",
                )
                if colour.isValid():
                    setattr(widget, attrname, colour)
                    self.settings.setValue(f"{widget.key}/{attrname}", colour)

            action = QAction(f"Set {text} colour", self)
            action.triggered.connect(
                partial(set_colour, widget=widget, attrname=attrname, text=text)
            )
            self.colour_menu.addAction(action)
            self.colour_menu_items.append(action)

            setattr(
                widget,
                attrname,
                QColor(self.settings.value(f"{widget.key}/{attrname}", default)),
            )

        background_colour_action = QAction("Set window background colour", self)
        background_colour_action.triggered.connect(
            lambda: self.set_background_colours()
        )
        self.set_background_colours(
            QColor(self.settings.value("background_colour", QColor(Qt.magenta)))
        )
        self.colour_menu.addAction(background_colour_action)
        self.colour_menu_items.append(background_colour_action)

    def debug_menu(self):
        self.debug_sub_menu = self.menu_bar.addMenu("Debug")

        self.fake_feeds_action = QAction("Use sample data", self)
        self.fake_feeds_action.setStatusTip(
            "Replace both feeds with a made-up campaign and a few donations"
        )

        def patch_getters():
            FeedGetter.local_get_donations = staticmethod(fake_get_donations)
            FeedGetter.local_get_config = staticmethod(fake_get_config)
            self.start_update_data()

        self.fake_feeds_action.triggered.connect(patch_getters)
        self.debug_sub_menu.addAction(self.fake_feeds_action)

    def set_background_colours(self, colour=None):
        if colour is None:
            colour = QColorDialog.getColor(
                initial=self.progress_bar.background_colour,
                parent=self,
                title="Choose window background colour",
            )
        if colour.isValid():
            self.settings.setValue("background_colour", colour)

            for window, _ in self.windows():
                window.background_colour = colour

    def set_url(self, feed):
        url, accept = QInputDialog.getText(
            self,
            "Enter URL",
            f"Enter the published CSV URL for the {feed} feed:",
            text=getattr(self, f"{feed}_url") or "",
        )

        if accept:
            setattr(self, f"{feed}_url", url)
            self.timer.status_display.status = "Connecting"
            self.timer.status_display.last_check = "Waiting to connect..."
            self.settings.setValue(f"{feed}_url", url)
            self.pause(force_resume=True)

    def set_refresh_time(self):
        refresh_time, accept = QInputDialog.getDouble(
            self,
            "Enter time",
            "Enter the time to wait between refreshes, in seconds:",
            self.timer_interval / 1000,
            MINIMUM_REFRESH_INTERVAL / 1000,
            86400,
            1,
        )

        if accept:
            self.timer_interval = max(
                int(refresh_time * 1000), MINIMUM_REFRESH_INTERVAL
            )
            self.settings.setValue("timer_interval", self.timer_interval)
            if self.timer.isActive():
                self.timer.stop()
                self.timer.start(self.timer_interval)

    def set_num_donors(self):
        num_donors, accept = QInputDialog.getInt(
            self,
            "Enter number of donations",
            "Enter the number of recent donations to display",
            self.donor_list.num_donors,
        )

        if accept:
            self.donor_list.num_donors = num_donors
            self.settings.setValue("donor_list/num_donors", num_donors)

    def show_hide_title_bars(self, hide):
        for window, _ in self.windows():
            visible = window.isVisible()
            window.title_bar_hidden = hide
            if visible:
                window.show()

        self.hide_title_bars_action.setVisible(not hide)
        self.show_title_bars_action.setVisible(hide)

        self.settings.setValue("hide_title_bars", hide)

    def start_update_data(self):
        for feed, url in [
            ("donations", self.donations_url),
            ("config", self.config_url),
        ]:
            if url:
                self.thread_pool.start(self.make_getter(feed, url))

    def make_getter(self, feed, url):
        getter = FeedGetter(feed, url)
        getter.signals.finished.connect(
            partial(
                self.complete_update_data,
                feed,
                url=url,
                fetch_number=next(self.fetch_numbers),
            )
        )
        return getter

    def complete_update_data(self, feed, result, url=None, fetch_number=None):
        logging.debug(f"Entered complete_update_data for {feed}")

        if url is not None and url != getattr(self, f"{feed}_url"):
            logging.debug(f"Ignoring {feed} from {url}, which is no longer in use")
            return
        if fetch_number is not None:
            if fetch_number < self.applied_fetch[feed]:
                logging.debug(f"Ignoring out-of-date {feed} fetch {fetch_number}")
                return
            self.applied_fetch[feed] = fetch_number

        if isinstance(result, Exception):
            logging.warning(f"Couldn't update {feed}: {result}")
            self.timer.update_failed_check(feed, result)
            return

        if feed == "donations":
            self.donations, self.skipped = result
            self.timer.update_last_check(feed, skipped=self.skipped)
        else:
            self.config = result
            self.timer.update_last_check(feed)

        self.refresh_views()

    def refresh_views(self):
        if self.donations is not None:
            self.progress_bar.summary = summarise(self.donations, self.config)
            self.donor_list.donations = self.donations
            self.tier_list.donations = self.donations
        else:
            self.progress_bar.summary = None

        self.donate_dialog.config = self.config
        if self.config is not None:
            self.countdown.deadline = self.config.deadline
            self.more_info_dialog.more_info = self.config.more_info

    def pause(self, force_resume=False):
        if not self.timer.isActive() or force_resume:
            self.timer.start(self.timer_interval)
            self.pause_action.setText("Pause")

            # Don't want to wait for timer to time out after resuming
            self.start_update_data()
        else:
            self.timer.stop()
            self.pause_action.setText("Resume")

    def closeEvent(self, event):
        self.settings.setValue(f"{self.key}/width", self.size().width())
        self.settings.setValue(f"{self.key}/height", self.size().height())
        self.settings.setValue(f"{self.key}/left", self.pos().x())
        self.settings.setValue(f"{self.key}/top", self.pos().y())

        self.timer.stop()
        QApplication.closeAllWindows()
        event.accept()


def main(debug=False):
    application = QApplication(sys.argv)
    window = DonationTracker(debug=debug)
    desktop = QDesktopWidget().availableGeometry()
    width = (desktop.width() - window.width()) // 2
    height = (desktop.height() - window.height()) // 2
    window.show()
    window.move(width, height)
    sys.exit(application.exec_())
