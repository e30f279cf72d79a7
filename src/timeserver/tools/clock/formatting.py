"""
Date/time rendering for the clock tools.

DateTimeFormatter is the single place that touches the platform clock and
timezone database. Tools only pass it instants and Intl-style option
dictionaries (``{"weekday": "long", "timeZone": "Europe/Paris"}``), so they
can be tested against a fixed clock and a fixed local zone.

Supported locales are the two rendering conventions the tools need:

    en-US   1/5/2024, 3:04:05 PM     Friday, January 5, 2024
    en-CA   2024-01-05, 3:04:05 p.m.
"""
import math
import os
from datetime import datetime, timedelta, timezone, tzinfo
from email.utils import format_datetime
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from ...exceptions import (
    InvalidFormatOptionError,
    InvalidTimestampError,
    InvalidTimezoneError,
)
from ...logger import get_logger

logger = get_logger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

SUPPORTED_LOCALES = ("en-US", "en-CA")
DAY_PERIODS = {
    "en-US": ("AM", "PM"),
    "en-CA": ("a.m.", "p.m."),
}

DATE_FIELDS = ("weekday", "year", "month", "day")
TIME_FIELDS = ("hour", "minute", "second")

# Allowed values for each Intl-style field option
FIELD_VALUES = {
    "weekday": ("long", "short", "narrow"),
    "year": ("numeric", "2-digit"),
    "month": ("numeric", "2-digit", "long", "short", "narrow"),
    "day": ("numeric", "2-digit"),
    "hour": ("numeric", "2-digit"),
    "minute": ("numeric", "2-digit"),
    "second": ("numeric", "2-digit"),
}
STYLE_VALUES = ("full", "long", "medium", "short")
HOUR_CYCLES = {"h11": True, "h12": True, "h23": False, "h24": False}

# dateStyle expanded into field options
DATE_STYLES = {
    "full": {"weekday": "long", "year": "numeric", "month": "long", "day": "numeric"},
    "long": {"year": "numeric", "month": "long", "day": "numeric"},
    "medium": {"year": "numeric", "month": "short", "day": "numeric"},
    "short": {"year": "2-digit", "month": "numeric", "day": "numeric"},
}
TIME_STYLES = {
    "full": {"hour": "numeric", "minute": "2-digit", "second": "2-digit"},
    "long": {"hour": "numeric", "minute": "2-digit", "second": "2-digit"},
    "medium": {"hour": "numeric", "minute": "2-digit", "second": "2-digit"},
    "short": {"hour": "numeric", "minute": "2-digit"},
}

TEXT_MONTHS = ("long", "short", "narrow")

# IANA names by their lower-case spelling; zone lookups ignore case
ZONE_NAMES = {name.lower(): name for name in available_timezones()}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def detect_local_timezone() -> tuple[tzinfo, str]:
    """Resolve the host's local zone and its identifier.

    Prefers the IANA key behind /etc/localtime; falls back to the
    interpreter's current local offset.
    """
    try:
        target = os.path.realpath("/etc/localtime")
    except OSError:
        target = ""

    marker = "zoneinfo" + os.sep
    if marker in target:
        key = target.split(marker, 1)[1]
        try:
            return ZoneInfo(key), key
        except (ZoneInfoNotFoundError, ValueError, OSError):
            pass

    local = datetime.now().astimezone().tzinfo
    return local, local.tzname(None) or "UTC"


class DateTimeFormatter:
    """
    Renders instants the way the clock tools report them.

    Args:
        clock: Callable returning the current aware datetime
        local_timezone: IANA zone treated as "local" (None asks the host)
        locale: Default locale for locale-style renderings
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        local_timezone: Optional[str] = None,
        locale: str = "en-US",
    ):
        self._clock = clock or utc_now
        self.local_zone, self.local_zone_name = None, None
        if local_timezone:
            try:
                self.local_zone = self.resolve_zone(local_timezone, local=False)
                self.local_zone_name = ZONE_NAMES.get(local_timezone.lower(), local_timezone)
            except InvalidTimezoneError:
                logger.warning("Unknown local time zone %r, using the host zone", local_timezone)
        if self.local_zone is None:
            self.local_zone, self.local_zone_name = detect_local_timezone()
        self.locale = locale if locale in SUPPORTED_LOCALES else "en-US"

    # ------------------------------------------------------------------
    # Instants
    # ------------------------------------------------------------------

    def now(self) -> datetime:
        """Current instant in UTC, truncated to milliseconds."""
        current = self._clock().astimezone(timezone.utc)
        return current.replace(microsecond=current.microsecond // 1000 * 1000)

    def from_timestamp(self, value: Any) -> datetime:
        """Build an instant from Unix milliseconds.

        Accepts ints, floats and numeric strings. Fractions are truncated
        toward zero. Instants outside years 1-9999 are rejected, a narrower
        range than the +/-8.64e15 ms a JavaScript Date allows.
        """
        if isinstance(value, bool):
            raise InvalidTimestampError()
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                raise InvalidTimestampError() from None
        if not isinstance(value, (int, float)):
            raise InvalidTimestampError()
        if isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidTimestampError()
            value = math.trunc(value)

        try:
            return EPOCH + timedelta(milliseconds=value)
        except OverflowError:
            raise InvalidTimestampError() from None

    @staticmethod
    def to_epoch_millis(instant: datetime) -> int:
        return (instant - EPOCH) // ONE_MILLISECOND

    def to_unix_seconds(self, instant: datetime) -> int:
        return self.to_epoch_millis(instant) // 1000

    # ------------------------------------------------------------------
    # Fixed renderings
    # ------------------------------------------------------------------

    @staticmethod
    def to_iso(instant: datetime) -> str:
        """ISO-8601 instant with milliseconds in UTC, e.g. 2024-01-05T15:04:05.789Z"""
        moment = instant.astimezone(timezone.utc)
        return (
            f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
            f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
            f".{moment.microsecond // 1000:03d}Z"
        )

    @staticmethod
    def to_utc_string(instant: datetime) -> str:
        """RFC-1123 rendering, e.g. Fri, 05 Jan 2024 15:04:05 GMT"""
        return format_datetime(instant.astimezone(timezone.utc), usegmt=True)

    # ------------------------------------------------------------------
    # Locale renderings
    # ------------------------------------------------------------------

    def to_locale_string(self, instant, options=None, locale=None) -> str:
        return self.format_instant(instant, options, locale, required="any", defaults="all")

    def to_locale_date_string(self, instant, options=None, locale=None) -> str:
        return self.format_instant(instant, options, locale, required="date", defaults="date")

    def to_locale_time_string(self, instant, options=None, locale=None) -> str:
        return self.format_instant(instant, options, locale, required="time", defaults="time")

    def format_instant(
        self,
        instant: datetime,
        options: Optional[dict[str, Any]] = None,
        locale: Optional[str] = None,
        required: str = "any",
        defaults: str = "all",
    ) -> str:
        """Render an instant with Intl-style options.

        Args:
            instant: Aware datetime to render
            options: Field options (weekday, year, month, day, hour, minute,
                second), hour12/hourCycle, timeZone, dateStyle, timeStyle
            locale: "en-US" or "en-CA"; anything else uses the default
            required: Which field group ("date", "time" or "any") must be
                present to skip the defaults
            defaults: Which field group ("date", "time" or "all") is filled
                in when none of the required fields were given

        Raises:
            InvalidTimezoneError: If options name an unknown timeZone
            InvalidFormatOptionError: If an option value is not allowed
            InvalidTimestampError: If the instant falls outside years 1-9999
                in the target zone
        """
        options = dict(options or {})
        locale = locale if locale in SUPPORTED_LOCALES else self.locale
        zone = self.resolve_zone(options.get("timeZone"))
        try:
            moment = instant.astimezone(zone)
        except OverflowError:
            raise InvalidTimestampError() from None

        fields = self._resolve_fields(options, required, defaults)
        hour12 = self._resolve_hour12(options)

        date_part = self._format_date(moment, fields, locale)
        time_part = self._format_time(moment, fields, hour12, locale)
        if options.get("timeStyle") in ("full", "long"):
            time_part = f"{time_part} {moment.tzname()}"

        if date_part and time_part:
            separator = " at " if options.get("dateStyle") in ("full", "long") else ", "
            return f"{date_part}{separator}{time_part}"
        return date_part or time_part

    # ------------------------------------------------------------------
    # Timezones
    # ------------------------------------------------------------------

    def resolve_zone(self, name: Any, local: bool = True) -> tzinfo:
        """Look up an IANA zone, ignoring case; None means the local zone."""
        if name is None and local:
            return self.local_zone
        if not isinstance(name, str) or not name.strip():
            raise InvalidTimezoneError(name)
        if name.upper() in ("UTC", "GMT", "ETC/UTC", "ETC/GMT"):
            return timezone.utc
        try:
            return ZoneInfo(ZONE_NAMES.get(name.lower(), name))
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise InvalidTimezoneError(name) from e

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_fields(options: dict, required: str, defaults: str) -> dict[str, str]:
        fields = {}
        for key, allowed in FIELD_VALUES.items():
            value = options.get(key)
            if value is None:
                continue
            if str(value) not in allowed:
                raise InvalidFormatOptionError(
                    f"Value {value} out of range for date format option '{key}'"
                )
            fields[key] = str(value)

        date_style = options.get("dateStyle")
        time_style = options.get("timeStyle")
        if date_style is not None or time_style is not None:
            if fields:
                field = next(iter(fields))
                raise InvalidFormatOptionError(
                    f"Can't set option {field} when dateStyle or timeStyle is used"
                )
            for key, value, styles in (
                ("dateStyle", date_style, DATE_STYLES),
                ("timeStyle", time_style, TIME_STYLES),
            ):
                if value is None:
                    continue
                if value not in STYLE_VALUES:
                    raise InvalidFormatOptionError(
                        f"Value {value} out of range for date format option '{key}'"
                    )
                fields.update(styles[value])
            return fields

        need_defaults = True
        if required in ("date", "any") and any(f in fields for f in DATE_FIELDS):
            need_defaults = False
        if required in ("time", "any") and any(f in fields for f in TIME_FIELDS):
            need_defaults = False

        if need_defaults and defaults in ("date", "all"):
            fields.update(year="numeric", month="numeric", day="numeric")
        if need_defaults and defaults in ("time", "all"):
            fields.update(hour="numeric", minute="numeric", second="numeric")
        return fields

    @staticmethod
    def _resolve_hour12(options: dict) -> bool:
        if options.get("hour12") is not None:
            return bool(options["hour12"])
        cycle = options.get("hourCycle")
        if cycle is not None:
            if cycle not in HOUR_CYCLES:
                raise InvalidFormatOptionError(
                    f"Value {cycle} out of range for date format option 'hourCycle'"
                )
            return HOUR_CYCLES[cycle]
        return True

    @staticmethod
    def _format_date(moment: datetime, fields: dict, locale: str) -> str:
        weekday = fields.get("weekday")
        year = fields.get("year")
        month = fields.get("month")
        day = fields.get("day")

        year_text = ""
        if year:
            year_text = f"{moment.year % 100:02d}" if year == "2-digit" else str(moment.year)
        day_text = ""
        if day:
            day_text = f"{moment.day:02d}" if day == "2-digit" else str(moment.day)

        if month in TEXT_MONTHS:
            month_text = _shorten(MONTHS[moment.month - 1], month)
            if day_text and year_text:
                body = f"{month_text} {day_text}, {year_text}"
            else:
                body = " ".join(part for part in (month_text, day_text, year_text) if part)
        elif locale == "en-CA" and month and day and year:
            body = f"{year_text}-{moment.month:02d}-{moment.day:02d}"
        elif month:
            month_text = f"{moment.month:02d}" if month == "2-digit" else str(moment.month)
            body = "/".join(part for part in (month_text, day_text, year_text) if part)
        else:
            body = " ".join(part for part in (day_text, year_text) if part)

        if weekday:
            weekday_text = _shorten(WEEKDAYS[moment.weekday()], weekday)
            return f"{weekday_text}, {body}" if body else weekday_text
        return body

    @staticmethod
    def _format_time(moment: datetime, fields: dict, hour12: bool, locale: str) -> str:
        hour = fields.get("hour")
        minute = fields.get("minute")
        second = fields.get("second")
        if not (hour or minute or second):
            return ""

        parts = []
        if hour:
            if hour12:
                value = moment.hour % 12 or 12
                parts.append(f"{value:02d}" if hour == "2-digit" else str(value))
            else:
                parts.append(f"{moment.hour:02d}")
        if minute:
            padded = len(parts) > 0 or second is not None or minute == "2-digit"
            parts.append(f"{moment.minute:02d}" if padded else str(moment.minute))
        if second:
            padded = len(parts) > 0 or second == "2-digit"
            parts.append(f"{moment.second:02d}" if padded else str(moment.second))

        text = ":".join(parts)
        if hour and hour12:
            am, pm = DAY_PERIODS[locale]
            text = f"{text} {pm if moment.hour >= 12 else am}"
        return text


def _shorten(name: str, style: str) -> str:
    if style == "short":
        return name[:3]
    if style == "narrow":
        return name[0]
    return name
