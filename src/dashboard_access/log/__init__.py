# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
from dashboard_access.log.config import setup_logging
from dashboard_access.log.context import (
    bind_log_context,
    clear_log_context,
    get_log_context,
    set_log_context,
)

__all__ = [
    "setup_logging",
    "bind_log_context",
    "clear_log_context",
    "get_log_context",
    "set_log_context",
]
