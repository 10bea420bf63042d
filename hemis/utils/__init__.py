# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for the legacy HEMIS API.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: CUBA datetime formatting and parsing
"""

from hemis.utils.datetime import (
    format_cuba_datetime,
    format_time,
    local_now,
    parse_cuba_datetime,
    parse_date,
    parse_time,
    utc_now,
)
from hemis.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # datetime
    "format_cuba_datetime",
    "format_time",
    "local_now",
    "parse_cuba_datetime",
    "parse_date",
    "parse_time",
    "utc_now",
    # logging
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
]
