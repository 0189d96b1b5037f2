"""Linker CLI 主入口"""

import sys

import click

from linker import __version__
from linker.cli.commands.check import check, name
from linker.cli.commands.config import config
from linker.cli.commands.create import create
from linker.cli.commands.interactive import interactive
from linker.core.exceptions import LinkerException


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--verbose',
    is_flag=True,
    help='详细日志输出（调试用）'
)
@click.option(
    '--no-color',
    is_flag=True,
    help='关闭彩色输出'
)
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False),
    default=None,
    help='配置文件路径（默认 $LINKER_CONFIG 或 ~/.linker.yaml）'
)
@click.pass_context
def cli(ctx, verbose, no_color, config_path):
    """Linker - 符号链接创建工具

    在目标目录中创建指向源文件或目录的符号链接。
    不会覆盖任何已存在的文件、目录或链接。

    命令：
      create <source> <destination> [--name NAME]   创建符号链接
      interactive                                  交互式创建
      check <path> [--dir]                         检查路径
      name <source>                                输出默认链接名
      config show|get|set                          配置管理

    示例:
      linker create ~/doc.txt ~/Desktop
      linker create ~/projects/app /usr/local/share -n app-current
      linker check ~/Desktop --dir
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['no_color'] = no_color
    ctx.obj['config_path'] = config_path


cli.add_command(create)
cli.add_command(interactive)
cli.add_command(check)
cli.add_command(name)
cli.add_command(config)


def main():
    """CLI 入口点，处理全局异常"""
    try:
        cli()
    except LinkerException as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
