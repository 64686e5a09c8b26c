from collections import namedtuple
from decimal import Decimal


Donation = namedtuple("Donation", ["name", "affiliation", "amount", "date"])
CampaignConfig = namedtuple(
    "CampaignConfig",
    [
        "goal",
        "deadline",
        "more_info",
        "paypal_email",
        "venmo_user",
        "zelle_email",
        "mailing_address",
    ],
)
TimeRemaining = namedtuple(
    "TimeRemaining", ["years", "days", "hours", "minutes", "seconds"]
)
DonationTier = namedtuple(
    "DonationTier", ["label", "minimum", "maximum", "details", "colour"]
)
AmountRange = namedtuple("AmountRange", ["minimum", "maximum"])
Summary = namedtuple("Summary", ["raised", "goal", "count", "fraction"])
FeedResult = namedtuple("FeedResult", ["records", "skipped"])


class _Expired:
    """Terminal countdown value, distinct from a TimeRemaining of all zeros."""

    def __repr__(self):
        return "EXPIRED"

    def __bool__(self):
        return False


EXPIRED = _Expired()

TIERS = (
    DonationTier("Gold", Decimal(300), Decimal("Infinity"), "$300+", "#FFD133"),
    DonationTier("Green", Decimal(100), Decimal(300), "$100 - $299+", "#046B37"),
    DonationTier("Purple", Decimal(50), Decimal(100), "$50 - $99", "#5E266D"),
    DonationTier("Brotherhood", Decimal(0), Decimal(50), "$1 - $49", None),
)
