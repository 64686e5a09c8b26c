from decimal import Decimal
from operator import attrgetter

from .types import TIERS, AmountRange, Summary


def total(donations):
    return sum((donation.amount for donation in donations), Decimal(0))


def donor_count(donations):
    return len(donations)


def amount_range(donations):
    """Return the smallest and largest donation, or None if there are none."""

    amounts = [donation.amount for donation in donations]
    if not amounts:
        return None
    return AmountRange(min(amounts), max(amounts))


def progress_fraction(raised, goal):
    """Return `raised / goal`, or None while the goal is unknown or not positive."""

    if goal is None or goal <= 0:
        return None
    return Decimal(raised) / Decimal(goal)


def tier_of(amount, tiers=TIERS):
    for tier in tiers:
        if tier.minimum <= amount < tier.maximum:
            return tier
    raise ValueError(f"No donation tier covers {amount}")


def by_tier(donations, tiers=TIERS):
    """Group donations by tier, largest first within each tier.

    Every tier gets an entry, in the order given, even if it is empty.
    """

    grouped = {tier: [] for tier in tiers}
    for donation in donations:
        grouped[tier_of(donation.amount, tiers)].append(donation)

    return {
        tier: sorted(members, key=attrgetter("amount"), reverse=True)
        for tier, members in grouped.items()
    }


def by_recency(donations):
    return sorted(donations, key=attrgetter("date"), reverse=True)


def visible_tiers(tiers, donation_range):
    if donation_range is None:
        return list(tiers)
    return [tier for tier in tiers if tier.maximum > donation_range.minimum]


def summarise(donations, config):
    raised = total(donations)
    goal = config.goal if config else None
    return Summary(
        raised, goal, donor_count(donations), progress_fraction(raised, goal)
    )
