"""CLI 交互输入工具封装"""

from typing import Any, Optional

import click


class InteractivePrompt:
    """交互式提示工具"""

    @staticmethod
    def confirm(message: str, default: bool = False) -> bool:
        """交互确认"""
        return click.confirm(message, default=default)

    @staticmethod
    def prompt_text(message: str, default: Optional[str] = None, type: Any = str) -> str:
        """交互文本输入，default 为空字符串时直接回车得到空字符串"""
        return click.prompt(
            message,
            default=default,
            type=type,
            show_default=bool(default),
        )
