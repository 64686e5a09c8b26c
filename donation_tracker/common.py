from urllib.parse import quote

from .types import EXPIRED


def format_money(amount):
    return f"${amount:,.2f}"


def format_pct(fraction):
    if fraction is None:
        return "--"
    return f"{fraction * 100:.2f}%"


def format_date(date):
    return date.strftime("%m/%d/%Y")


def format_donation(donation):
    if donation.affiliation:
        return f"{donation.name} ({donation.affiliation})"
    return donation.name


def format_time_remaining(remaining):
    if remaining is EXPIRED:
        return "FINISHED!"

    clock = (
        f"{remaining.hours:02}:{remaining.minutes:02}:{int(remaining.seconds):02}"
    )
    if remaining.years:
        return f"{remaining.years}y {remaining.days}d {clock}"
    if remaining.days:
        return f"{remaining.days}d {clock}"
    return clock


def paypal_url(email):
    return (
        f"https://www.paypal.com/donate?business={quote(email, safe='@')}"
        "&item_name=Donation&currency_code=USD"
    )


def venmo_url(handle):
    return f"https://venmo.com/{quote(handle.lstrip('@'))}"
