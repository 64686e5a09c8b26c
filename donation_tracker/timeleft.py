from .types import EXPIRED, TimeRemaining


# 365.25 days approximates a calendar year without leap-year bookkeeping,
# so long countdowns can drift by up to a day.
SECONDS_PER_YEAR = 365.25 * 86400
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


def compute_time_remaining(target, now):
    """Break the time from `now` until `target` into years, days, hours,
    minutes and seconds, or return `EXPIRED` once `target` has passed.

    Each unit is only taken off while the remainder still covers it, so a
    short countdown never touches the larger units.
    """

    diff = (target - now).total_seconds()
    if diff <= 0:
        return EXPIRED

    years = days = hours = minutes = 0

    if diff >= SECONDS_PER_YEAR:
        years = int(diff // SECONDS_PER_YEAR)
        diff -= years * SECONDS_PER_YEAR
    if diff >= SECONDS_PER_DAY:
        days = int(diff // SECONDS_PER_DAY)
        diff -= days * SECONDS_PER_DAY
    if diff >= SECONDS_PER_HOUR:
        hours = int(diff // SECONDS_PER_HOUR)
        diff -= hours * SECONDS_PER_HOUR
    if diff >= SECONDS_PER_MINUTE:
        minutes = int(diff // SECONDS_PER_MINUTE)
        diff -= minutes * SECONDS_PER_MINUTE

    return TimeRemaining(years, days, hours, minutes, diff)


def total_seconds(remaining):
    return (
        remaining.years * SECONDS_PER_YEAR
        + remaining.days * SECONDS_PER_DAY
        + remaining.hours * SECONDS_PER_HOUR
        + remaining.minutes * SECONDS_PER_MINUTE
        + remaining.seconds
    )
