import json
import re
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from timeserver.tools import create_dispatcher

TOOL_NAMES = ["get_current_time", "get_current_date", "get_datetime_info", "format_timestamp"]


# ============ tools/list ============

def test_list_tools_order_and_schemas(dispatcher) -> None:
    tools = dispatcher.list_tools()
    assert [t.name for t in tools] == TOOL_NAMES

    by_name = {t.name: t.inputSchema for t in tools}
    assert by_name["get_current_time"]["properties"]["format"]["enum"] == ["iso", "local", "utc", "unix"]
    assert by_name["get_current_time"]["properties"]["timezone"]["default"] == "local"
    assert by_name["get_current_date"]["properties"]["format"]["enum"] == ["iso", "local", "short", "long", "custom"]
    assert "default" not in by_name["get_current_date"]["properties"]["customFormat"]
    assert by_name["format_timestamp"]["properties"]["timestamp"]["type"] == "number"
    assert by_name["format_timestamp"]["required"] == ["timestamp"]
    assert by_name["get_datetime_info"]["required"] == []


def test_list_tools_is_stable(dispatcher) -> None:
    first = [t.model_dump() for t in dispatcher.list_tools()]
    dispatcher.list_tools()[0].inputSchema["properties"].clear()
    second = [t.model_dump() for t in dispatcher.list_tools()]
    assert first == second


# ============ dispatch ============

def test_unknown_tool(call) -> None:
    assert call("get_weather") == ("Error: Unknown tool: get_weather", True)


def test_none_arguments_use_defaults(call) -> None:
    assert call("get_current_time", None) == ("Current time (iso): 2024-01-05T15:04:05.789Z", False)


def test_null_argument_values_use_defaults(call) -> None:
    text, _ = call("get_current_time", {"format": None, "timezone": None})
    assert text == "Current time (iso): 2024-01-05T15:04:05.789Z"


def test_concurrent_calls_do_not_interfere(dispatcher) -> None:
    calls = [("format_timestamp", {"timestamp": n * 1000}) for n in range(50)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda c: dispatcher.call_tool(*c), calls))

    for n, result in enumerate(results):
        assert result.content[0].text == f"Formatted timestamp: 1970-01-01T00:00:{n:02d}.000Z"


# ============ get_current_time ============

@pytest.mark.parametrize("time_format, expected", [
    ("iso", "2024-01-05T15:04:05.789Z"),
    ("local", "3:04:05 PM"),
    ("utc", "Fri, 05 Jan 2024 15:04:05 GMT"),
    ("unix", "1704467045"),
    ("weird", "2024-01-05T15:04:05.789Z"),
])
def test_current_time_formats(call, time_format, expected) -> None:
    text, is_error = call("get_current_time", {"format": time_format})
    assert text == f"Current time ({time_format}): {expected}"
    assert not is_error


def test_current_time_in_timezone(call) -> None:
    text, _ = call("get_current_time", {"format": "utc", "timezone": "America/New_York"})
    assert text == "Current time (utc): 10:04:05 AM"


def test_current_time_timezone_ignores_case(call) -> None:
    text, _ = call("get_current_time", {"format": "utc", "timezone": "america/new_york"})
    assert text == "Current time (utc): 10:04:05 AM"


def test_current_time_unix_ignores_timezone(call) -> None:
    text, _ = call("get_current_time", {"format": "unix", "timezone": "Not/AZone"})
    assert text == "Current time (unix): 1704467045"


def test_current_time_invalid_timezone(call) -> None:
    text, is_error = call("get_current_time", {"timezone": "Not/AZone"})
    assert not is_error
    assert text == (
        "Current time (iso): 2024-01-05T15:04:05.789Z"
        " (Note: Invalid timezone 'Not/AZone', showing in local time)"
    )


def test_current_time_unix_tracks_real_clock() -> None:
    dispatcher = create_dispatcher()
    before = int(time.time())
    result = dispatcher.call_tool("get_current_time", {"format": "unix"})
    after = int(time.time())

    match = re.fullmatch(r"Current time \(unix\): (\d+)", result.content[0].text)
    assert match
    assert before - 1 <= int(match.group(1)) <= after + 1


# ============ get_current_date ============

@pytest.mark.parametrize("date_format, expected", [
    ("iso", "2024-01-05"),
    ("local", "1/5/2024"),
    ("short", "Jan 5, 2024"),
    ("long", "Friday, January 5, 2024"),
    ("unknown", "2024-01-05"),
])
def test_current_date_formats(call, date_format, expected) -> None:
    assert call("get_current_date", {"format": date_format}) == (
        f"Current date ({date_format}): {expected}", False
    )


def test_current_date_in_timezone(call) -> None:
    assert call("get_current_date", {"format": "long", "timezone": "Asia/Tokyo"})[0] == (
        "Current date (long): 2024-01-06"
    )


def test_current_date_invalid_timezone(call) -> None:
    text, is_error = call("get_current_date", {"format": "short", "timezone": "Mars/Olympus"})
    assert not is_error
    assert text == "Current date (short): Jan 5, 2024 (Note: Invalid timezone 'Mars/Olympus', showing in local time)"


def test_custom_date_requires_format(call) -> None:
    assert call("get_current_date", {"format": "custom"}) == (
        "Current date (custom): Custom format requires customFormat parameter", False
    )


def test_custom_date_with_bad_json(call) -> None:
    text, is_error = call("get_current_date", {"format": "custom", "customFormat": "{not valid json"})
    assert not is_error
    assert text.startswith("Current date (custom): Error parsing custom format:")


def test_custom_date_with_bad_option(call) -> None:
    text, is_error = call("get_current_date", {"format": "custom", "customFormat": '{"weekday": "longest"}'})
    assert not is_error
    assert "Error parsing custom format:" in text
    assert "weekday" in text


def test_custom_date_with_non_object(call) -> None:
    text, _ = call("get_current_date", {"format": "custom", "customFormat": "[1, 2]"})
    assert "Error parsing custom format:" in text


def test_custom_date(call) -> None:
    options = json.dumps({"weekday": "short", "month": "long", "day": "numeric"})
    assert call("get_current_date", {"format": "custom", "customFormat": options})[0] == (
        "Current date (custom): Fri, January 5"
    )


def test_custom_date_ignores_timezone_argument(call) -> None:
    options = json.dumps({"year": "numeric", "month": "2-digit", "day": "2-digit"})
    text, _ = call("get_current_date", {"format": "custom", "customFormat": options, "timezone": "Asia/Tokyo"})
    assert text == "Current date (custom): 01/05/2024"


def test_custom_date_honours_time_zone_option(call) -> None:
    options = json.dumps({"timeZone": "Asia/Tokyo", "month": "short", "day": "numeric"})
    assert call("get_current_date", {"format": "custom", "customFormat": options})[0] == (
        "Current date (custom): Jan 6"
    )


# ============ get_datetime_info ============

def _info(call, arguments=None) -> dict:
    text, is_error = call("get_datetime_info", arguments)
    assert not is_error
    header, payload = text.split("\n", 1)
    assert header == "Date/Time Information:"
    return json.loads(payload)


def test_datetime_info(call) -> None:
    info = _info(call)
    assert list(info) == [
        "timestamp", "iso", "local", "utc", "unix", "year", "month", "day",
        "hour", "minute", "second", "dayOfWeek", "timezone",
    ]
    assert info == {
        "timestamp": 1704467045789,
        "iso": "2024-01-05T15:04:05.789Z",
        "local": "1/5/2024, 3:04:05 PM",
        "utc": "Fri, 05 Jan 2024 15:04:05 GMT",
        "unix": 1704467045,
        "year": 2024,
        "month": 1,
        "day": 5,
        "hour": 15,
        "minute": 4,
        "second": 5,
        "dayOfWeek": "Friday",
        "timezone": "UTC",
    }


def test_datetime_info_is_indented(call) -> None:
    text, _ = call("get_datetime_info")
    assert '\n  "timestamp": 1704467045789,' in text


def test_datetime_info_with_timezone(call) -> None:
    info = _info(call, {"timezone": "America/New_York"})
    assert info["timezoneSpecific"] == "1/5/2024, 10:04:05 AM"
    assert info["requestedTimezone"] == "America/New_York"
    assert "timezoneError" not in info


def test_datetime_info_with_invalid_timezone(call) -> None:
    info = _info(call, {"timezone": "Not/AZone"})
    assert info["timezoneError"] == "Invalid timezone: Not/AZone"
    assert "timezoneSpecific" not in info
    assert "requestedTimezone" not in info


# ============ format_timestamp ============

def test_format_timestamp_requires_timestamp(call) -> None:
    assert call("format_timestamp", {}) == ("Error: Timestamp is required", True)
    assert call("format_timestamp", {"timestamp": None, "format": "utc"}) == ("Error: Timestamp is required", True)


def test_format_timestamp_rejects_invalid(call) -> None:
    text, is_error = call("format_timestamp", {"timestamp": "not-a-number-coercible-to-invalid-date"})
    assert is_error
    assert "Invalid timestamp" in text


def test_format_timestamp_epoch(call) -> None:
    assert call("format_timestamp", {"timestamp": 0, "format": "iso"}) == (
        "Formatted timestamp: 1970-01-01T00:00:00.000Z", False
    )


@pytest.mark.parametrize("arguments, expected", [
    ({"format": "utc"}, "Thu, 01 Jan 1970 00:00:00 GMT"),
    ({"format": "local"}, "1/1/1970, 12:00:00 AM"),
    ({"format": "custom"}, "1/1/1970, 12:00:00 AM"),
    ({"format": "custom", "timezone": "America/New_York"}, "12/31/1969, 7:00:00 PM"),
    ({"format": "custom", "timezone": "Not/AZone"}, "1/1/1970, 12:00:00 AM (Invalid timezone: Not/AZone)"),
    ({"format": "utc", "timezone": "Not/AZone"}, "Thu, 01 Jan 1970 00:00:00 GMT"),
    ({"format": "other"}, "1970-01-01T00:00:00.000Z"),
])
def test_format_timestamp_formats(call, arguments, expected) -> None:
    assert call("format_timestamp", {"timestamp": 0, **arguments}) == (
        f"Formatted timestamp: {expected}", False
    )


def test_format_timestamp_fixed_instant(call) -> None:
    assert call("format_timestamp", {"timestamp": 1704467045789})[0] == (
        "Formatted timestamp: 2024-01-05T15:04:05.789Z"
    )


def test_format_timestamp_at_end_of_range(call) -> None:
    assert call("format_timestamp", {"timestamp": 253402300799999}) == (
        "Formatted timestamp: 9999-12-31T23:59:59.999Z", False
    )
    assert call("format_timestamp", {"timestamp": 253402300799999, "format": "custom", "timezone": "Asia/Tokyo"}) == (
        "Error: Invalid timestamp", True
    )
