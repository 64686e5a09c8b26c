import csv
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
import io
import logging

import requests

from PyQt5.QtCore import QObject, QRunnable, pyqtSignal, pyqtSlot

from .settings import DEFAULT_TIMEOUT
from .types import CampaignConfig, Donation, FeedResult


class MalformedRecord(ValueError):
    pass


class DataSourceUnavailable(RuntimeError):
    pass


# Formats Google Sheets uses when publishing dates to CSV
date_formats = [
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%m/%d/%y",
]


def parse_amount(text):
    if text is None:
        raise MalformedRecord("Missing amount")

    cleaned = text.strip().replace("$", "").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise MalformedRecord(f"Amount {text!r} is not a number")

    if not amount.is_finite() or amount < 0:
        raise MalformedRecord(f"Amount {text!r} is not a valid donation")
    return amount


def parse_date(text):
    if not text or not text.strip():
        raise MalformedRecord("Missing date")

    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    for date_format in date_formats:
        try:
            date = datetime.strptime(text, date_format)
        except ValueError:
            continue
        else:
            break
    else:
        try:
            date = datetime.fromisoformat(text)
        except ValueError:
            raise MalformedRecord(f"Couldn't understand the date {text!r}")

    if not date.tzinfo:
        date = date.astimezone()
    return date


def parse_donation(row):
    name = (row.get("name") or "").strip()
    if not name:
        raise MalformedRecord("Donation has no name")

    return Donation(
        name,
        (row.get("zeta") or "").strip() or None,
        parse_amount(row.get("amount")),
        parse_date(row.get("date")),
    )


def parse_config(row):
    return CampaignConfig(
        goal=parse_amount(row.get("donationGoal")),
        deadline=parse_date(row.get("deadline")),
        more_info=row.get("moreInfo") or "",
        paypal_email=(row.get("paypalEmail") or "").strip(),
        venmo_user=(row.get("venmoUser") or "").strip(),
        zelle_email=(row.get("zelleEmail") or "").strip(),
        mailing_address=row.get("mailCheckAddress") or "",
    )


def fetch_rows(url, timeout=DEFAULT_TIMEOUT):
    """Download the CSV published at `url`.

    Returns `(row_number, row)` pairs, numbered the way the spreadsheet numbers
    them (the header is row 1), with all-blank rows left out.
    """

    logging.debug(f"Fetching {url}")
    try:
        response = requests.get(url, timeout=timeout)
    except requests.exceptions.RequestException as ex:
        raise DataSourceUnavailable(f"Couldn't reach the server: {ex}") from ex

    if not 200 <= response.status_code < 300:
        raise DataSourceUnavailable(
            f"Couldn't get data from the server; got a {response.status_code} error."
        )

    # Sheets publishes UTF-8 but often leaves the charset off the Content-Type
    try:
        body = response.content.decode("utf-8-sig")
    except UnicodeDecodeError as ex:
        raise DataSourceUnavailable(f"The feed at {url} isn't UTF-8: {ex}") from ex

    reader = csv.DictReader(io.StringIO(body))
    return [
        (number, row)
        for number, row in enumerate(reader, start=2)
        if not is_blank(row)
    ]


def is_blank(row):
    # Short rows pad with None; long rows collect extras in a list under None
    return not any(
        value.strip() for value in row.values() if isinstance(value, str)
    )


def get_donations(url, timeout=DEFAULT_TIMEOUT):
    """Given the donations feed `url`, return every well-formed donation and
    the number of rows that had to be skipped."""

    donations = []
    skipped = 0
    for number, row in fetch_rows(url, timeout):
        try:
            donations.append(parse_donation(row))
        except MalformedRecord as ex:
            logging.warning(f"Skipping donation row {number}: {ex}")
            skipped += 1

    return FeedResult(donations, skipped)


def get_config(url, timeout=DEFAULT_TIMEOUT):
    rows = fetch_rows(url, timeout)
    if not rows:
        raise MalformedRecord("Campaign config feed is empty")
    _, row = rows[0]
    return parse_config(row)


def fake_get_donations(url, timeout=None):
    """Return a handful of made-up donations, one in each tier."""

    now = datetime.now(timezone.utc)
    return FeedResult(
        [
            Donation("Test donor", "Alpha", Decimal(500), now - timedelta(days=3)),
            Donation(
                "Another test donor", None, Decimal(150), now - timedelta(days=2)
            ),
            Donation(
                "A third test donor", "Beta", Decimal(75), now - timedelta(days=1)
            ),
            Donation("The last test donor", None, Decimal(20), now),
        ],
        0,
    )


def fake_get_config(url, timeout=None):
    return CampaignConfig(
        goal=Decimal(1000),
        deadline=datetime.now(timezone.utc) + timedelta(days=1, hours=1, minutes=1),
        more_info="This is a test campaign.\nNothing here is real.",
        paypal_email="test@example.com",
        venmo_user="test-donations",
        zelle_email="test@example.com",
        mailing_address="123 Test Street\nTestville, NY 12180",
    )


class FeedSignals(QObject):
    finished = pyqtSignal(object)


class FeedGetter(QRunnable):
    """Fetch one feed off the GUI thread.

    `signals.finished` carries the parsed result, or the exception that
    stopped us getting one.
    """

    local_get_donations = staticmethod(get_donations)
    local_get_config = staticmethod(get_config)

    def __init__(self, kind, url, *args, **kwargs):
        super().__init__(*args, **kwargs)
        logging.debug(f"FeedGetter created for {kind}.")

        self.kind = kind
        self.url = url
        self.signals = FeedSignals()

    @pyqtSlot()
    def run(self):
        getter = getattr(self, f"local_get_{self.kind}")
        try:
            result = getter(self.url)
        except Exception as ex:
            logging.debug(f"Couldn't get {self.kind} due to {ex}")
            self.signals.finished.emit(ex)
        else:
            self.signals.finished.emit(result)
