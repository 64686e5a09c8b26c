from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from PyQt5.QtCore import QSettings

from donation_tracker import donation_tracker
from donation_tracker.feeds import DataSourceUnavailable
from donation_tracker.types import CampaignConfig, Donation, FeedResult


NOW = datetime.now(timezone.utc)


@pytest.fixture
def settings(tmp_path):
    return QSettings(str(tmp_path / "donation_tracker.ini"), QSettings.IniFormat)


@pytest.fixture
def fetches(monkeypatch):
    """Record feed refreshes instead of going to the network."""

    calls = []
    monkeypatch.setattr(
        donation_tracker.DonationTracker,
        "start_update_data",
        lambda self: calls.append(self),
    )
    return calls


@pytest.fixture
def window(qtbot, settings, fetches):
    """Pass the application to the test functions via a pytest fixture."""
    new_window = donation_tracker.DonationTracker(settings=settings)
    qtbot.add_widget(new_window)
    new_window.show()
    return new_window


@pytest.fixture
def donations():
    return FeedResult(
        [
            Donation("Alice", "Alpha", Decimal(50), NOW - timedelta(days=2)),
            Donation("Bob", None, Decimal(300), NOW - timedelta(days=1)),
        ],
        1,
    )


@pytest.fixture
def config():
    return CampaignConfig(
        goal=Decimal(1000),
        deadline=NOW + timedelta(days=2),
        more_info="Details",
        paypal_email="pay@example.com",
        venmo_user="chapter-fund",
        zelle_email="zelle@example.com",
        mailing_address="1 Main St",
    )


def test_window_title(window):
    """Check that the window title shows as declared."""
    assert window.windowTitle() == "Donation Tracker"


def test_feeds_fetched_on_start(window, fetches):
    assert fetches == [window]
    assert window.timer.isActive()
    assert window.timer_status_display.status == "Running"


def test_nothing_fetched_without_urls(qtbot, settings, fetches):
    settings.setValue("donations_url", "")
    settings.setValue("config_url", "")

    new_window = donation_tracker.DonationTracker(settings=settings)
    qtbot.add_widget(new_window)

    assert fetches == []
    assert not new_window.timer.isActive()


def test_loading_until_donations_arrive(window, config):
    window.complete_update_data("config", config)

    assert window.donations is None
    assert window.progress_bar.summary is None
    assert window.progress_bar.progress_bar.caption == "Loading..."
    assert window.countdown.deadline == config.deadline
    assert window.more_info_dialog.more_info == "Details"


def test_donations_before_config(window, donations):
    window.complete_update_data("donations", donations)

    summary = window.progress_bar.summary
    assert summary.raised == Decimal(350)
    assert summary.count == 2
    assert summary.goal is None
    assert summary.fraction is None
    assert window.timer_status_display.warning == "1 malformed donation row skipped"


def test_both_feeds_loaded(window, donations, config):
    window.complete_update_data("donations", donations)
    window.complete_update_data("config", config)

    assert window.progress_bar.summary.fraction == Decimal("0.35")
    assert window.donor_list.donation_widgets[0].donation.name == "Bob"
    assert window.donate_dialog.paypal_button.isEnabled()


def test_failed_fetch_keeps_previous_data(window, donations):
    window.complete_update_data("donations", donations)

    window.complete_update_data("donations", DataSourceUnavailable("500 error"))

    assert window.donations == donations.records
    assert window.timer_status_display.status == "Attempting to connect"
    assert "500 error" in window.timer_status_display.last_check


def test_pause_and_resume(window, fetches):
    window.pause()
    assert not window.timer.isActive()
    assert window.pause_action.text() == "Resume"

    window.pause()
    assert window.timer.isActive()
    assert window.pause_action.text() == "Pause"
    assert len(fetches) == 2


def test_title_bar_setting_is_saved(window, settings):
    window.show_hide_title_bars(hide=True)

    assert window.progress_bar.title_bar_hidden
    assert settings.value("hide_title_bars", type=bool)
    assert window.show_title_bars_action.isVisible()


def donations_from(url):
    return FeedResult([Donation(url, None, Decimal(10), NOW)], 0)


def test_result_from_replaced_url_is_ignored(window, monkeypatch):
    monkeypatch.setattr(
        donation_tracker.FeedGetter,
        "local_get_donations",
        staticmethod(donations_from),
    )
    window.donations_url = "https://old"
    old_getter = window.make_getter("donations", "https://old")
    window.donations_url = "https://new"
    new_getter = window.make_getter("donations", "https://new")

    new_getter.run()
    old_getter.run()

    assert [d.name for d in window.donations] == ["https://new"]


def test_older_overlapping_fetch_is_ignored(window):
    first = window.make_getter("donations", window.donations_url)
    second = window.make_getter("donations", window.donations_url)
    first.local_get_donations = lambda url: donations_from("first")
    second.local_get_donations = lambda url: donations_from("second")

    second.run()
    first.run()

    assert [d.name for d in window.donations] == ["second"]


def test_refresh_time_has_a_minimum(window, monkeypatch, settings):
    requested = []

    def get_double(*args):
        requested.append(args)
        return 0.0, True

    monkeypatch.setattr(donation_tracker.QInputDialog, "getDouble", get_double)

    window.set_refresh_time()

    assert requested[0][4] == 1
    assert window.timer_interval == 1000
    assert window.timer.interval() == 1000
    assert int(settings.value("timer_interval")) == 1000
