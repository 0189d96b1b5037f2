"""CLI 输出格式化工具

提供颜色、键值对和错误模板的格式化功能。"""

from typing import Any, Dict, Optional

from linker.core.data_structures import LinkResult
from linker.core.exceptions import ErrorKind


# 错误消息模板，按 ErrorKind 取用
ERROR_TEMPLATES = {
    ErrorKind.NOT_FOUND: "路径不存在。\n{message}\n解决方案: 检查源路径和目标目录是否正确。",
    ErrorKind.WRONG_KIND: "目标必须是目录。\n{message}\n解决方案: 选择一个文件夹作为目标。",
    ErrorKind.ALREADY_EXISTS: "目标位置已有同名条目，未做任何修改。\n{message}\n解决方案: 使用 --name 指定其他链接名。",
    ErrorKind.PERMISSION_DENIED: "权限不足。\n{message}",
    ErrorKind.IO_ERROR: "创建符号链接失败。\n{message}",
    ErrorKind.INVALID_NAME: "链接名无效。\n{message}\n解决方案: 链接名不能为空，也不能包含路径分隔符。",
}


class Color:
    """ANSI 颜色代码"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    CYAN = '\033[36m'


class FormatterConfig:
    """格式化配置中心"""

    def __init__(self, no_color: bool = False):
        """初始化配置
        Args:
            no_color: 是否禁用颜色输出
        """
        self.no_color = no_color

    def colorize(self, text: str, color: str) -> str:
        """根据配置为文本添加 ANSI 颜色"""
        if self.no_color:
            return text
        return f"{color}{text}{Color.RESET}"


class OutputFormatter:
    """CLI 输出格式化器"""

    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()

    def success(self, message: str) -> str:
        """格式化成功消息"""
        prefix = self.config.colorize("+", Color.GREEN)
        return f"{prefix} {message}"

    def error(self, message: str) -> str:
        """格式化错误消息"""
        prefix = self.config.colorize("-", Color.RED)
        return f"{prefix} {message}"

    def warning(self, message: str) -> str:
        """格式化警告消息"""
        prefix = self.config.colorize("!", Color.YELLOW)
        return f"{prefix} {message}"

    def info(self, message: str) -> str:
        """格式化普通信息消息"""
        prefix = self.config.colorize("*", Color.BLUE)
        return f"{prefix} {message}"

    def format_error(self, error_kind: ErrorKind, message: str = "") -> str:
        """根据模板格式化特定类型的错误

        Args:
            error_kind: 错误分类
            message: 底层错误消息
        """
        template = ERROR_TEMPLATES.get(error_kind, "错误: {message}")
        return self.error(template.format(message=message))

    def format_result(self, result: LinkResult, source: Any = None) -> str:
        """格式化建链结果"""
        if not result.succeeded:
            return self.format_error(result.error_kind, result.message)

        details = {"链接": result.resulting_path}
        if source is not None:
            details["指向"] = source
        return self.success(f"符号链接已创建\n{self.format_key_value(details, indent='  ')}")

    def format_key_value(self, items: Dict[str, Any], indent: str = "") -> str:
        """格式化键值对列表"""
        if not items:
            return ""
        max_key_len = max(len(str(k)) for k in items.keys())
        lines = []
        for key, value in items.items():
            lines.append(f"{indent}{str(key).ljust(max_key_len)}: {value}")
        return "\n".join(lines)


def format_summary(title: str, items: Dict[str, Any], config: Optional[FormatterConfig] = None) -> str:
    """生成格式化的摘要"""
    cfg = config or FormatterConfig()
    lines = [cfg.colorize(f" {title} " + "=" * max(0, 40 - len(title)), Color.BOLD)]

    if items:
        max_key_len = max(len(str(k)) for k in items.keys())
        for key, value in items.items():
            lines.append(f"  {str(key).ljust(max_key_len)}: {value}")

    lines.append("-" * 50)
    return "\n".join(lines)
