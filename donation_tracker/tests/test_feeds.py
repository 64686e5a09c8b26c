from decimal import Decimal
import logging

import pytest
import requests

from donation_tracker import feeds
from donation_tracker.feeds import (
    DataSourceUnavailable,
    FeedGetter,
    MalformedRecord,
    get_config,
    get_donations,
    parse_amount,
    parse_date,
    parse_donation,
)
from donation_tracker.types import FeedResult


DONATIONS_CSV = """name,zeta,amount,date
Alice,Alpha,$50.00,9/1/2023
Bob,,$300,9/2/2023
Carol,Beta,"$1,000.00",9/3/2023 18:30:00
Dan,,lots,9/4/2023
Eve,,$10,not a date
,,,
"""

CONFIG_CSV = """donationGoal,deadline,moreInfo,paypalEmail,venmoUser,zelleEmail,mailCheckAddress
18000,10/1/2023 23:59:59,"Come to ritual.
Bring friends.",pay@example.com,chapter-fund,zelle@example.com,"1 Main St
Troy, NY"
"""


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.content = text.encode("utf-8")
        self.status_code = status_code


@pytest.fixture
def serve(monkeypatch):
    """Make requests.get return `text` with `status_code` for any URL."""

    requested = []

    def set_response(text="", status_code=200):
        def fake_get(url, timeout=None):
            requested.append(url)
            return FakeResponse(text, status_code)

        monkeypatch.setattr(feeds.requests, "get", fake_get)
        return requested

    return set_response


@pytest.mark.parametrize(
    "text, expected",
    [
        ("$50.00", Decimal("50.00")),
        (" $1,234.50 ", Decimal("1234.50")),
        ("25", Decimal(25)),
        ("0", Decimal(0)),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", [None, "", "$", "lots", "-5", "NaN", "Infinity"])
def test_parse_amount_rejects(text):
    with pytest.raises(MalformedRecord):
        parse_amount(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("9/15/2023", (2023, 9, 15, 0, 0)),
        ("09/15/2023 18:30:00", (2023, 9, 15, 18, 30)),
        ("9/15/2023 18:30", (2023, 9, 15, 18, 30)),
        ("9/15/23", (2023, 9, 15, 0, 0)),
        ("2023-09-15T18:30:00", (2023, 9, 15, 18, 30)),
        ("2023-09-15T18:30:00Z", (2023, 9, 15, 18, 30)),
    ],
)
def test_parse_date(text, expected):
    date = parse_date(text)
    assert date.tzinfo is not None
    assert (date.year, date.month, date.day, date.hour, date.minute) == expected


def test_parse_date_keeps_given_time_zone():
    date = parse_date("2023-09-15T18:30:00+00:00")
    assert date.utcoffset().total_seconds() == 0
    assert date.hour == 18


def test_parse_date_z_suffix_is_utc():
    date = parse_date("2023-09-15T18:30:00Z")
    assert date.utcoffset().total_seconds() == 0
    assert date.hour == 18


@pytest.mark.parametrize("text", [None, "", "   ", "not a date", "31/31/2023"])
def test_parse_date_rejects(text):
    with pytest.raises(MalformedRecord):
        parse_date(text)


def test_parse_donation_without_affiliation():
    donation = parse_donation(
        {"name": " Bob ", "zeta": "", "amount": "$5", "date": "9/1/2023"}
    )
    assert donation.name == "Bob"
    assert donation.affiliation is None
    assert donation.amount == Decimal(5)


def test_parse_donation_needs_a_name():
    with pytest.raises(MalformedRecord):
        parse_donation({"name": "", "amount": "$5", "date": "9/1/2023"})


def test_get_donations_skips_and_counts_bad_rows(serve):
    requested = serve(DONATIONS_CSV)

    result = get_donations("https://example.com/donations.csv")

    assert requested == ["https://example.com/donations.csv"]
    assert isinstance(result, FeedResult)
    assert [d.name for d in result.records] == ["Alice", "Bob", "Carol"]
    assert [d.affiliation for d in result.records] == ["Alpha", None, "Beta"]
    assert [d.amount for d in result.records] == [
        Decimal("50.00"),
        Decimal(300),
        Decimal("1000.00"),
    ]
    assert result.skipped == 2


def test_get_donations_from_empty_feed(serve):
    serve("name,zeta,amount,date\n")
    assert get_donations("https://example.com/donations.csv") == FeedResult([], 0)


def test_server_error_is_reported(serve):
    serve("Internal Server Error", status_code=500)
    with pytest.raises(DataSourceUnavailable, match="500"):
        get_donations("https://example.com/donations.csv")


def test_connection_failure_is_reported(monkeypatch):
    def refuse(url, timeout=None):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(feeds.requests, "get", refuse)
    with pytest.raises(DataSourceUnavailable):
        get_config("https://example.com/config.csv")


def test_get_config(serve):
    serve(CONFIG_CSV)

    config = get_config("https://example.com/config.csv")

    assert config.goal == Decimal(18000)
    assert (config.deadline.month, config.deadline.day) == (10, 1)
    assert config.more_info == "Come to ritual.\nBring friends."
    assert config.paypal_email == "pay@example.com"
    assert config.venmo_user == "chapter-fund"
    assert config.zelle_email == "zelle@example.com"
    assert config.mailing_address == "1 Main St\nTroy, NY"


def test_empty_config_feed(serve):
    serve("donationGoal,deadline\n")
    with pytest.raises(MalformedRecord):
        get_config("https://example.com/config.csv")


def test_feed_getter_emits_result(qtbot, monkeypatch):
    result = FeedResult([], 0)
    monkeypatch.setattr(
        FeedGetter, "local_get_donations", staticmethod(lambda url: result)
    )
    received = []

    getter = FeedGetter("donations", "https://example.com/donations.csv")
    getter.signals.finished.connect(received.append)
    getter.run()

    assert received == [result]


def test_feed_getter_emits_errors(qtbot, monkeypatch):
    def unavailable(url):
        raise DataSourceUnavailable("nope")

    monkeypatch.setattr(FeedGetter, "local_get_config", staticmethod(unavailable))
    received = []

    getter = FeedGetter("config", "https://example.com/config.csv")
    getter.signals.finished.connect(received.append)
    getter.run()

    assert len(received) == 1
    assert isinstance(received[0], DataSourceUnavailable)


def test_csv_without_charset_is_read_as_utf8(monkeypatch):
    response = requests.models.Response()
    response.status_code = 200
    response.headers["Content-Type"] = "text/csv"
    response.encoding = requests.utils.get_encoding_from_headers(response.headers)
    response._content = "name,zeta,amount,date\nJosé Muñoz,Ωmega,$25,9/1/2023\n".encode(
        "utf-8"
    )
    monkeypatch.setattr(feeds.requests, "get", lambda url, timeout=None: response)

    result = get_donations("https://example.com/donations.csv")

    assert result.records[0].name == "José Muñoz"
    assert result.records[0].affiliation == "Ωmega"


def test_byte_order_mark_is_dropped(serve):
    serve("\ufeffname,zeta,amount,date\nAlice,,$5,9/1/2023\n")

    result = get_donations("https://example.com/donations.csv")

    assert [d.name for d in result.records] == ["Alice"]


def test_skipped_rows_are_reported_by_sheet_row(serve, caplog):
    serve(
        "name,zeta,amount,date\n"
        ",,,\n"
        "Alice,,$5,9/1/2023\n"
        "Dan,,lots,9/4/2023\n"
    )

    with caplog.at_level(logging.WARNING):
        result = get_donations("https://example.com/donations.csv")

    assert result.skipped == 1
    assert "Skipping donation row 4" in caplog.text
