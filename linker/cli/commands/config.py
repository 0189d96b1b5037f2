"""linker config 命令实现

用于查看和修改 .linker.yaml 配置。"""

from typing import Any

import click
import yaml

from linker.core.config_manager import ConfigManager, parse_value
from linker.core.exceptions import ConfigException
from linker.core.logger import get_logger
from linker.cli.utils import OutputFormatter, get_formatter, load_settings

logger = get_logger("config_command")

_MISSING = object()


class ConfigCommand:
    """配置管理命令"""

    def __init__(self, config_manager: ConfigManager, formatter: OutputFormatter = None):
        self.config_manager = config_manager
        self.formatter = formatter or OutputFormatter()

    def execute_show(self) -> str:
        """输出完整配置"""
        config = self.config_manager.load_config()
        header = self.formatter.info(f"配置文件: {self.config_manager.config_path}")
        body = yaml.dump(config, default_flow_style=False, sort_keys=False, allow_unicode=True)
        return f"{header}\n{body.rstrip()}"

    def execute_get(self, key: str) -> str:
        """获取配置项

        Raises:
            ConfigException: 配置项不存在
        """
        value = self.config_manager.get(key, _MISSING)
        if value is _MISSING:
            raise ConfigException(f"配置项不存在: {key}")
        if isinstance(value, dict):
            return yaml.dump(value, default_flow_style=False, sort_keys=False).rstrip()
        return "null" if value is None else str(value)

    def execute_set(self, key: str, value: Any) -> str:
        """设置配置项并写回配置文件"""
        self.config_manager.set(key, parse_value(value))
        self.config_manager.save_config()
        logger.info("Configuration updated", key=key)
        return self.formatter.success(f"{key} = {self.config_manager.get(key)}")


@click.group()
def config():
    """管理 linker 配置"""
    pass


def _command(ctx: click.Context) -> ConfigCommand:
    return ConfigCommand(load_settings(ctx), get_formatter(ctx))


@config.command('show')
@click.pass_context
def config_show(ctx: click.Context):
    """显示当前生效的配置"""
    try:
        click.echo(_command(ctx).execute_show())
    except ConfigException as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@config.command('get')
@click.argument('key')
@click.pass_context
def config_get(ctx: click.Context, key: str):
    """获取配置项的值"""
    try:
        click.echo(_command(ctx).execute_get(key))
    except ConfigException as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@config.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str):
    """设置配置项的值"""
    try:
        click.echo(_command(ctx).execute_set(key, value))
    except ConfigException as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
