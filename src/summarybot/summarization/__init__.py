"""Channel history retrieval and prompt building for summaries."""

from .history import Period, fetch_all_messages, fetch_channel_logs, format_dump_line, format_log_line
from .prompts import build_question_prompt, build_summary_prompt

__all__ = [
    "Period",
    "fetch_all_messages",
    "fetch_channel_logs",
    "format_dump_line",
    "format_log_line",
    "build_question_prompt",
    "build_summary_prompt",
]
