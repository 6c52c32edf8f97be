"""Git commit log extraction."""

from spreadtheword.extraction.log_collector import (
    DEFAULT_BRANCH,
    DELIMITER,
    LogCollector,
    git_user_name,
    parse_log,
    parse_log_line,
    project_ref_from_remotes,
)

__all__ = [
    "DEFAULT_BRANCH",
    "DELIMITER",
    "LogCollector",
    "git_user_name",
    "parse_log",
    "parse_log_line",
    "project_ref_from_remotes",
]
