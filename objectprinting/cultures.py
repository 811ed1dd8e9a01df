"""
Culture-aware formatting of numbers and dates.

Locale data and number/date patterns come from Babel (CLDR). Values are formatted
the way a locale writes them by default: decimal separators follow the locale,
digit grouping is not applied and no fractional digits are dropped.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime
from decimal import Decimal
from fractions import Fraction
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_time, format_timedelta, get_datetime_format
from babel.numbers import format_decimal

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type, fmt_value

DATE_FORMAT = "short"
TIME_FORMAT = "medium"

CULTURE_TYPES = (
    int,
    float,
    Decimal,
    Fraction,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
)


# Methods --------------------------------------------------------------------------------------------------------------

def to_locale(locale: Locale | str) -> Locale:
    """
    Return a babel Locale from a Locale or an identifier like 'de_DE', 'de-DE' or 'ru'.

    Raises:
        TypeError: If locale is neither a Locale nor a str.
        ValueError: If the identifier is malformed or unknown to CLDR.
    """
    if isinstance(locale, Locale):
        return locale
    if not isinstance(locale, str):
        raise TypeError(f"locale must be a babel Locale or str identifier, but found {fmt_type(locale)}")
    try:
        return Locale.parse(locale.replace("-", "_"))
    except (ValueError, UnknownLocaleError) as e:
        raise ValueError(f"Unknown locale identifier: {fmt_value(locale)}") from e


def supports_culture(typ: type) -> bool:
    """Check whether values of typ can be formatted by format_culture()."""
    return issubclass(typ, CULTURE_TYPES) and not issubclass(typ, bool)


def format_culture(value: Any, locale: Locale | str) -> str:
    """
    Format a number, date, time, datetime or timedelta according to locale.

    Dates use the locale short date pattern and times the medium (seconds included)
    time pattern; a datetime joins both with the locale short date-time pattern,
    e.g. '26.02.04, 13:30:00' for 'de_DE'.

    Examples:
        >>> format_culture(200.22, "ru_RU")
        '200,22'
        >>> format_culture(1234567.5, "en_US")
        '1234567.5'

    Raises:
        TypeError: If value type has no locale-aware representation.
    """
    locale = to_locale(locale)

    # datetime is a subclass of date, check it first
    if isinstance(value, datetime.datetime):
        return _format_general_datetime(value, locale)
    if isinstance(value, datetime.date):
        return format_date(value, format=DATE_FORMAT, locale=locale)
    if isinstance(value, datetime.time):
        return format_time(value, format=TIME_FORMAT, locale=locale)
    if isinstance(value, datetime.timedelta):
        return format_timedelta(value, locale=locale)

    if isinstance(value, bool) or not supports_culture(type(value)):
        raise TypeError(f"Culture formatting is not supported for {fmt_value(value)}")

    if isinstance(value, Fraction):
        value = Decimal(value.numerator) / Decimal(value.denominator)
    return format_decimal(value, locale=locale, group_separator=False, decimal_quantization=False)


# Private Methods ------------------------------------------------------------------------------------------------------

def _format_general_datetime(value: datetime.datetime, locale: Locale) -> str:
    """Short date and medium time joined by the locale date-time pattern."""
    pattern = get_datetime_format(DATE_FORMAT, locale=locale)
    return (
        pattern.replace("'", "")
        .replace("{0}", format_time(value, format=TIME_FORMAT, locale=locale))
        .replace("{1}", format_date(value, format=DATE_FORMAT, locale=locale))
    )
