# SKSYNC Output Module
# Rich console output, diff display and sync history log

from sksync.output.console import Console, create_console
from sksync.output.diff import format_diff_summary, render_file_diff, render_lines
from sksync.output.history_log import SyncHistoryLog

__all__ = [
    "Console",
    "create_console",
    "format_diff_summary",
    "render_file_diff",
    "render_lines",
    "SyncHistoryLog",
]
