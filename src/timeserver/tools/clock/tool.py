"""
Clock tools: current time, current date, datetime info and timestamp formatting.
"""
import json
from typing import Any

from ...exceptions import InvalidTimezoneError, ToolError
from ..base import parameter, tool
from .formatting import DateTimeFormatter
from .schemas import DateTimeInfo

LOCAL = "local"

TIME_FORMATS = ["iso", "local", "utc", "unix"]
DATE_FORMATS = ["iso", "local", "short", "long", "custom"]
TIMESTAMP_FORMATS = ["iso", "local", "utc", "custom"]

TIMEZONE_DESCRIPTION = "Timezone (e.g., 'America/New_York', 'Europe/London')"


def _arg(arguments: dict, name: str, default: Any = None) -> Any:
    """Read an argument; null counts as absent."""
    value = arguments.get(name)
    return default if value is None else value


def _invalid_timezone_note(timezone: Any) -> str:
    return f" (Note: Invalid timezone '{timezone}', showing in local time)"


@tool(
    name="get_current_time",
    description="Get the current time in various formats",
    properties={
        "format": parameter(
            str,
            "Time format: 'iso', 'local', 'utc', or 'unix'",
            enum=TIME_FORMATS,
            default="iso",
        ),
        "timezone": parameter(str, TIMEZONE_DESCRIPTION, default=LOCAL),
    },
)
def get_current_time(arguments: dict, formatter: DateTimeFormatter) -> str:
    time_format = _arg(arguments, "format", "iso")
    timezone = _arg(arguments, "timezone", LOCAL)
    now = formatter.now()

    if time_format == "local":
        time_string = formatter.to_locale_time_string(now)
    elif time_format == "utc":
        time_string = formatter.to_utc_string(now)
    elif time_format == "unix":
        time_string = str(formatter.to_unix_seconds(now))
    else:
        time_string = formatter.to_iso(now)

    # Epoch seconds are the same in every zone
    if timezone != LOCAL and time_format != "unix":
        try:
            time_string = formatter.to_locale_time_string(
                now, {"timeZone": timezone, "timeStyle": "medium"}, locale="en-US"
            )
        except InvalidTimezoneError:
            time_string += _invalid_timezone_note(timezone)

    return f"Current time ({time_format}): {time_string}"


@tool(
    name="get_current_date",
    description="Get the current date in various formats",
    properties={
        "format": parameter(
            str,
            "Date format: 'iso', 'local', 'short', 'long', or 'custom'",
            enum=DATE_FORMATS,
            default="iso",
        ),
        "customFormat": parameter(
            str,
            "Custom format string (when format is 'custom'). "
            "A JSON object of Intl.DateTimeFormat options",
        ),
        "timezone": parameter(str, TIMEZONE_DESCRIPTION, default=LOCAL),
    },
)
def get_current_date(arguments: dict, formatter: DateTimeFormatter) -> str:
    date_format = _arg(arguments, "format", "iso")
    custom_format = arguments.get("customFormat")
    timezone = _arg(arguments, "timezone", LOCAL)
    now = formatter.now()

    if date_format == "local":
        date_string = formatter.to_locale_date_string(now)
    elif date_format == "short":
        date_string = formatter.to_locale_date_string(
            now, {"year": "numeric", "month": "short", "day": "numeric"}, locale="en-US"
        )
    elif date_format == "long":
        date_string = formatter.to_locale_date_string(
            now,
            {"weekday": "long", "year": "numeric", "month": "long", "day": "numeric"},
            locale="en-US",
        )
    elif date_format == "custom":
        date_string = _custom_date(now, custom_format, formatter)
    else:
        date_string = formatter.to_iso(now).split("T")[0]

    if timezone != LOCAL and date_format != "custom":
        try:
            date_string = formatter.to_locale_date_string(
                now,
                {"timeZone": timezone, "year": "numeric", "month": "2-digit", "day": "2-digit"},
                locale="en-CA",
            )
        except InvalidTimezoneError:
            date_string += _invalid_timezone_note(timezone)

    return f"Current date ({date_format}): {date_string}"


def _custom_date(now, custom_format: Any, formatter: DateTimeFormatter) -> str:
    if not custom_format:
        return "Custom format requires customFormat parameter"

    try:
        options = json.loads(custom_format)
        if not isinstance(options, dict):
            raise ValueError("customFormat must be a JSON object")
        return formatter.to_locale_date_string(now, options, locale="en-US")
    except (ValueError, TypeError) as e:
        return f"Error parsing custom format: {e}"


@tool(
    name="get_datetime_info",
    description="Get comprehensive date and time information",
    properties={
        "timezone": parameter(str, TIMEZONE_DESCRIPTION, default=LOCAL),
    },
)
def get_datetime_info(arguments: dict, formatter: DateTimeFormatter) -> str:
    timezone = _arg(arguments, "timezone", LOCAL)
    now = formatter.now()
    local = now.astimezone(formatter.local_zone)

    info = DateTimeInfo(
        timestamp=formatter.to_epoch_millis(now),
        iso=formatter.to_iso(now),
        local=formatter.to_locale_string(now),
        utc=formatter.to_utc_string(now),
        unix=formatter.to_unix_seconds(now),
        year=local.year,
        month=local.month,
        day=local.day,
        hour=local.hour,
        minute=local.minute,
        second=local.second,
        dayOfWeek=formatter.to_locale_date_string(now, {"weekday": "long"}, locale="en-US"),
        timezone=formatter.local_zone_name,
    )

    if timezone != LOCAL:
        try:
            info.timezoneSpecific = formatter.to_locale_string(
                now, {"timeZone": timezone}, locale="en-US"
            )
            info.requestedTimezone = timezone
        except InvalidTimezoneError:
            info.timezoneError = f"Invalid timezone: {timezone}"

    payload = json.dumps(info.model_dump(exclude_none=True), indent=2, ensure_ascii=False)
    return f"Date/Time Information:\n{payload}"


@tool(
    name="format_timestamp",
    description="Format a given timestamp",
    properties={
        "timestamp": parameter(float, "Unix timestamp in milliseconds"),
        "format": parameter(
            str,
            "Output format: 'iso', 'local', 'utc', or 'custom'",
            enum=TIMESTAMP_FORMATS,
            default="iso",
        ),
        "timezone": parameter(str, "Timezone for formatting", default=LOCAL),
    },
    required=("timestamp",),
)
def format_timestamp(arguments: dict, formatter: DateTimeFormatter) -> str:
    timestamp = arguments.get("timestamp")
    output_format = _arg(arguments, "format", "iso")
    timezone = _arg(arguments, "timezone", LOCAL)

    # 0 is the epoch, not a missing value
    if timestamp is None:
        raise ToolError("Timestamp is required")

    moment = formatter.from_timestamp(timestamp)

    if output_format == "local":
        formatted = formatter.to_locale_string(moment)
    elif output_format == "utc":
        formatted = formatter.to_utc_string(moment)
    elif output_format == "custom":
        if timezone != LOCAL:
            try:
                formatted = formatter.to_locale_string(moment, {"timeZone": timezone}, locale="en-US")
            except InvalidTimezoneError:
                formatted = f"{formatter.to_locale_string(moment)} (Invalid timezone: {timezone})"
        else:
            formatted = formatter.to_locale_string(moment)
    else:
        formatted = formatter.to_iso(moment)

    return f"Formatted timestamp: {formatted}"
