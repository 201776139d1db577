"""Report-related models."""

from enum import Enum


class OutputFormat(str, Enum):
    """Supported status output formats."""

    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
