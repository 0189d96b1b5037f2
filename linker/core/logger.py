"""结构化日志系统

基于 structlog 的日志记录器，支持操作追踪（operation_id、耗时、状态）。"""

import logging
import time
import traceback
import contextvars
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pathlib import Path

import structlog


# 当前操作 ID，后台线程中由 OperationTracer 设置
_operation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    'operation_id', default=""
)

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class LoggerConfig:
    """日志配置类"""

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        level: str = "INFO",
        json_output: bool = False,
        console_output: bool = False,
    ):
        """初始化日志配置
        Args:
            log_dir: 日志目录，如果为 None 则不写入文件
            level: 日志级别 (DEBUG, INFO, WARNING, ERROR)
            json_output: 是否输出 JSON 格式
            console_output: 是否输出到控制台
        """
        self.log_dir = log_dir
        self.level = level
        self.json_output = json_output
        self.console_output = console_output

    @classmethod
    def from_dict(cls, data: Dict[str, Any], console_output: bool = False) -> 'LoggerConfig':
        """从配置文件的 logging 段构建

        Args:
            data: 形如 {"level": ..., "json": ..., "log_dir": ...} 的字典
            console_output: 是否输出到控制台
        """
        log_dir = data.get("log_dir")
        return cls(
            log_dir=Path(log_dir).expanduser() if log_dir else None,
            level=str(data.get("level", "INFO")).upper(),
            json_output=bool(data.get("json", False)),
            console_output=console_output,
        )


# 由 _setup_structlog 挂到 "linker" 记录器上的处理器
_installed_handlers: List[logging.Handler] = []


def _setup_structlog(config: LoggerConfig) -> None:
    """配置 structlog 及 "linker" 命名空间下的标准库 logging"""
    base_logger = logging.getLogger("linker")

    for handler in _installed_handlers:
        base_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    # 控制台输出走 stderr，避免和命令输出混在一起
    if config.console_output:
        _installed_handlers.append(logging.StreamHandler())

    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        _installed_handlers.append(logging.FileHandler(log_dir / "linker.log"))

    for handler in _installed_handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
        base_logger.addHandler(handler)
    base_logger.setLevel(getattr(logging, config.level, logging.INFO))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
            if config.json_output
            else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


class Logger:
    """结构化日志记录器"""

    def __init__(self, name: str = "linker", config: Optional[LoggerConfig] = None):
        """初始化日志记录器

        Args:
            name: 日志记录器名称
            config: 日志配置对象，给定时会重新配置 structlog
        """
        self.name = name
        self.config = config or _current_config
        if config is not None:
            _setup_structlog(config)
        self.logger = structlog.get_logger(name)

    def debug(self, event: str, **kwargs) -> None:
        """记录 DEBUG 级别日志"""
        self._log("debug", event, **kwargs)

    def info(self, event: str, **kwargs) -> None:
        """记录 INFO 级别日志"""
        self._log("info", event, **kwargs)

    def warning(self, event: str, **kwargs) -> None:
        """记录 WARNING 级别日志"""
        self._log("warning", event, **kwargs)

    def error(self, event: str, **kwargs) -> None:
        """记录 ERROR 级别日志"""
        self._log("error", event, **kwargs)

    def _log(self, level: str, event: str, **kwargs) -> None:
        context = self._build_context(**kwargs)
        getattr(self.logger, level)(event, **context)

    def _build_context(self, **kwargs) -> Dict[str, Any]:
        """构建日志上下文，附带当前 operation_id"""
        context = {}

        operation_id = _operation_id.get()
        if operation_id:
            context['operation_id'] = operation_id

        context.update(kwargs)
        return context

    @staticmethod
    def set_operation_id(operation_id: str) -> None:
        _operation_id.set(operation_id)

    @staticmethod
    def clear_context() -> None:
        """清除链路上下文"""
        _operation_id.set("")


class OperationTracer:
    """操作追踪器

    记录操作的开始、结束和异常，统计耗时。
    """

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or Logger()
        self.operations: Dict[str, Dict[str, Any]] = {}

    def start_operation(
        self,
        operation_name: str,
        operation_id: Optional[str] = None,
        **context
    ) -> str:
        """记录操作开始

        Args:
            operation_name: 操作名称
            operation_id: 操作 ID，如果为 None 则自动生成
            **context: 操作上下文信息

        Returns:
            操作 ID
        """
        op_id = operation_id or str(uuid.uuid4())

        self.operations[op_id] = {
            'name': operation_name,
            'start_time': time.time(),
            'started_at': datetime.now(timezone.utc).isoformat(),
            'context': context,
            'status': 'running',
        }
        Logger.set_operation_id(op_id)

        self.logger.info(f'{operation_name}_started', **context)
        return op_id

    def end_operation(
        self,
        operation_id: str,
        status: str = "success",
        **context
    ) -> Dict[str, Any]:
        """记录操作结束

        Args:
            operation_id: 操作 ID
            status: 操作状态 ("success", "failure")
            **context: 额外的上下文信息

        Returns:
            包含操作统计的字典
        """
        if operation_id not in self.operations:
            raise ValueError(f"Operation {operation_id} not found")

        # 结束的操作不再保留，交互会话中记录不会累积
        op_data = self.operations.pop(operation_id)
        duration_ms = int((time.time() - op_data['start_time']) * 1000)

        event_name = f"{op_data['name']}_{'succeeded' if status == 'success' else 'failed'}"
        log_method = self.logger.info if status == "success" else self.logger.warning
        log_method(event_name, duration_ms=duration_ms, status=status, **context)

        if _operation_id.get() == operation_id:
            Logger.clear_context()

        return {
            'operation_id': operation_id,
            'name': op_data['name'],
            'duration_ms': duration_ms,
            'status': status,
        }

    def record_exception(self, operation_id: str, exception: BaseException) -> None:
        """记录操作中的非预期异常"""
        if operation_id not in self.operations:
            raise ValueError(f"Operation {operation_id} not found")

        self.logger.error(
            f"{self.operations[operation_id]['name']}_error",
            error_type=type(exception).__name__,
            error_message=str(exception),
            traceback=traceback.format_exc(),
        )

    def get_operation_stats(self, operation_id: str) -> Optional[Dict[str, Any]]:
        """获取进行中操作的记录，已结束的操作返回 None"""
        return self.operations.get(operation_id)


# 未配置任何输出时保持静默
logging.getLogger("linker").addHandler(logging.NullHandler())

_current_config = LoggerConfig()
_setup_structlog(_current_config)


def get_logger(name: str = "linker") -> Logger:
    """获取日志记录器实例

    Args:
        name: 组件名称，统一挂在 "linker" 命名空间下

    Returns:
        使用当前全局配置的日志记录器
    """
    if name != "linker" and not name.startswith("linker."):
        name = f"linker.{name}"
    return Logger(name)


def configure_logger(config: LoggerConfig) -> None:
    """重新配置全局日志

    之后通过 get_logger 取得的记录器（以及已有记录器）都使用新配置。
    """
    global _current_config
    _current_config = config
    _setup_structlog(config)


def get_logger_config() -> LoggerConfig:
    return _current_config
