"""
Time Server Tools Registry.

Importing this package registers every tool in TOOL_REGISTRY and exposes
create_dispatcher() for the transports.
"""
from typing import Optional

from .. import config
from .base import TOOL_REGISTRY, ToolDispatcher
from .clock import tool as clock_tools  # noqa: F401  (registers the clock tools)
from .clock.formatting import DateTimeFormatter


def create_dispatcher(formatter: Optional[DateTimeFormatter] = None) -> ToolDispatcher:
    """Build a dispatcher over all registered tools.

    Args:
        formatter: Formatter to render with; defaults to one configured
            from the environment
    """
    if formatter is None:
        formatter = DateTimeFormatter(
            local_timezone=config.LOCAL_TIMEZONE,
            locale=config.DEFAULT_LOCALE,
        )
    return ToolDispatcher(formatter=formatter, registry=TOOL_REGISTRY)


__all__ = ["TOOL_REGISTRY", "ToolDispatcher", "DateTimeFormatter", "create_dispatcher"]
