"""CLI 运行时设置

根据全局选项（--config、--verbose、--no-color）加载配置、配置日志，
并在 click 上下文中缓存结果，供各个子命令使用。
"""

import click

from linker.core.config_manager import ConfigManager
from linker.core.logger import LoggerConfig, configure_logger
from linker.cli.utils.formatting import FormatterConfig, OutputFormatter


def load_settings(ctx: click.Context) -> ConfigManager:
    """加载配置并配置日志（每个上下文只做一次）

    Raises:
        ConfigException: 配置文件无法读取或不合法
    """
    obj = ctx.ensure_object(dict)
    if obj.get('config_manager') is not None:
        return obj['config_manager']

    config_manager = ConfigManager(obj.get('config_path'))
    config = config_manager.load_config()

    verbose = obj.get('verbose', False)
    logger_config = LoggerConfig.from_dict(config["logging"], console_output=verbose)
    if verbose:
        logger_config.level = "DEBUG"
    configure_logger(logger_config)

    obj['config_manager'] = config_manager
    return config_manager


def get_formatter(ctx: click.Context) -> OutputFormatter:
    """按 --no-color 与 display.colors 构建格式化器"""
    obj = ctx.ensure_object(dict)
    no_color = obj.get('no_color', False)

    config_manager = obj.get('config_manager')
    if config_manager is not None and not config_manager.get("display.colors", True):
        no_color = True

    return OutputFormatter(FormatterConfig(no_color=no_color))
