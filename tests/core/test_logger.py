"""结构化日志系统的单元测试"""

import json
import logging
import tempfile
from pathlib import Path

import pytest

from linker.core.logger import (
    Logger,
    LoggerConfig,
    OperationTracer,
    configure_logger,
    get_logger,
    get_logger_config,
    _operation_id,
)


@pytest.fixture(autouse=True)
def restore_logging():
    """每个测试后恢复默认日志配置"""
    yield
    configure_logger(LoggerConfig())
    Logger.clear_context()


class TestLoggerConfig:
    """测试 LoggerConfig 类"""

    def test_default_config(self):
        """测试默认配置"""
        config = LoggerConfig()

        assert config.log_dir is None
        assert config.level == "INFO"
        assert config.json_output is False
        assert config.console_output is False

    def test_from_dict(self):
        """测试从配置文件的 logging 段构建"""
        config = LoggerConfig.from_dict(
            {"level": "debug", "json": True, "log_dir": "~/logs"},
            console_output=True,
        )

        assert config.level == "DEBUG"
        assert config.json_output is True
        assert config.log_dir == Path.home() / "logs"
        assert config.console_output is True

    def test_from_dict_without_log_dir(self):
        config = LoggerConfig.from_dict({"level": "INFO", "json": False, "log_dir": None})

        assert config.log_dir is None


class TestLogger:
    """测试 Logger 类"""

    def test_get_logger_namespaced(self):
        """测试组件名挂在 linker 命名空间下"""
        assert get_logger("coordinator").name == "linker.coordinator"
        assert get_logger("linker.session").name == "linker.session"
        assert get_logger().name == "linker"

    def test_configure_logger_updates_global_config(self):
        config = LoggerConfig(level="DEBUG")
        configure_logger(config)

        assert get_logger_config() is config

    def test_json_log_written_to_file(self):
        """测试 JSON 日志写入文件"""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir)
            configure_logger(LoggerConfig(log_dir=log_dir, level="DEBUG", json_output=True))

            get_logger("test").info("link_created", path="/tmp/x")
            for handler in logging.getLogger("linker").handlers:
                handler.flush()

            lines = (log_dir / "linker.log").read_text().strip().splitlines()
            entry = json.loads(lines[-1])

            assert entry["event"] == "link_created"
            assert entry["path"] == "/tmp/x"
            assert entry["level"] == "info"
            assert entry["logger"] == "linker.test"

            # 关闭文件处理器，临时目录才能删除
            configure_logger(LoggerConfig())

    def test_level_applied_to_namespace(self):
        """测试日志级别作用于 linker 命名空间"""
        configure_logger(LoggerConfig(level="WARNING"))

        assert logging.getLogger("linker").level == logging.WARNING

    def test_operation_id_added_to_context(self):
        """测试当前 operation_id 附加到日志上下文"""
        logger = Logger("test")
        Logger.set_operation_id("op-1")

        assert logger._build_context(a=1) == {"operation_id": "op-1", "a": 1}

        Logger.clear_context()
        assert logger._build_context(a=1) == {"a": 1}


class TestOperationTracer:
    """测试 OperationTracer 类"""

    def test_start_and_end(self):
        """测试操作开始和结束"""
        tracer = OperationTracer(Logger("test"))

        op_id = tracer.start_operation("create_link", source="/a")
        assert _operation_id.get() == op_id
        assert tracer.get_operation_stats(op_id)["status"] == "running"

        stats = tracer.end_operation(op_id, "success")

        assert stats["status"] == "success"
        assert stats["duration_ms"] >= 0
        assert _operation_id.get() == ""

    def test_end_unknown_operation(self):
        tracer = OperationTracer(Logger("test"))

        with pytest.raises(ValueError):
            tracer.end_operation("unknown")

    def test_record_exception(self):
        """测试记录异常不抛出"""
        tracer = OperationTracer(Logger("test"))
        op_id = tracer.start_operation("create_link")

        tracer.record_exception(op_id, OSError("boom"))
        stats = tracer.end_operation(op_id, "failure")

        assert stats["status"] == "failure"
        assert stats["name"] == "create_link"

    def test_finished_operations_not_retained(self):
        """测试结束的操作从记录中移除"""
        tracer = OperationTracer(Logger("test"))

        op_ids = [tracer.start_operation("create_link") for _ in range(3)]
        for op_id in op_ids:
            tracer.end_operation(op_id, "success")

        assert tracer.operations == {}
        assert tracer.get_operation_stats(op_ids[0]) is None
