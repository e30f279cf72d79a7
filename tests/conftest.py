from datetime import datetime, timezone

import pytest

from timeserver.tools import create_dispatcher
from timeserver.tools.clock.formatting import DateTimeFormatter

# Friday, 2024-01-05 15:04:05.789 UTC
FIXED_INSTANT = datetime(2024, 1, 5, 15, 4, 5, 789000, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_instant() -> datetime:
    return FIXED_INSTANT


@pytest.fixture()
def formatter() -> DateTimeFormatter:
    """Formatter pinned to FIXED_INSTANT with UTC as the local zone."""
    return DateTimeFormatter(clock=lambda: FIXED_INSTANT, local_timezone="UTC")


@pytest.fixture()
def dispatcher(formatter):
    return create_dispatcher(formatter)


@pytest.fixture()
def call(dispatcher):
    """Call a tool and return (text, isError)."""
    def _call(name, arguments=None):
        result = dispatcher.call_tool(name, arguments)
        assert len(result.content) == 1
        return result.content[0].text, result.isError
    return _call
