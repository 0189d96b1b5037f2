"""CLI 工具包导出"""

from .formatting import (
    OutputFormatter,
    FormatterConfig,
    format_summary,
    Color,
    ERROR_TEMPLATES,
)
from .interactive import InteractivePrompt
from .settings import load_settings, get_formatter

__all__ = [
    'OutputFormatter',
    'FormatterConfig',
    'format_summary',
    'Color',
    'ERROR_TEMPLATES',
    'InteractivePrompt',
    'load_settings',
    'get_formatter',
]
