"""linker check / linker name 命令实现

check: 报告路径上的条目类型，或校验失败的原因。
name: 输出源路径对应的默认链接名。
"""

from typing import Optional

import click

from linker.core.data_structures import PathInfo
from linker.core.exceptions import PathValidationError
from linker.core.link_name_resolver import LinkNameResolver
from linker.core.path_validator import PathValidator
from linker.cli.utils import OutputFormatter, get_formatter


class CheckCommand:
    """路径检查命令"""

    def __init__(self, validator: Optional[PathValidator] = None, formatter: Optional[OutputFormatter] = None):
        self.validator = validator or PathValidator()
        self.formatter = formatter or OutputFormatter()

    def execute(self, path: str, require_directory: bool = False) -> PathInfo:
        """校验路径并返回路径信息

        Raises:
            PathValidationError: 校验失败
        """
        self.validator.validate(path, require_directory=require_directory)
        return self.validator.inspect(path)

    def render(self, info: PathInfo) -> str:
        return self.formatter.success(
            self.formatter.format_key_value({"路径": info.path, "类型": info.kind.value})
        )


@click.command(name="check")
@click.argument("path")
@click.option("-d", "--dir", "require_directory", is_flag=True, help="要求路径是目录")
@click.pass_context
def check(ctx: click.Context, path: str, require_directory: bool) -> None:
    """检查 PATH 是否可用作源路径或目标目录"""
    cmd = CheckCommand(formatter=get_formatter(ctx))
    try:
        info = cmd.execute(path, require_directory=require_directory)
    except PathValidationError as e:
        click.echo(cmd.formatter.format_error(e.error_kind, e.message), err=True)
        ctx.exit(1)
    click.echo(cmd.render(info))


@click.command(name="name")
@click.argument("source")
def name(source: str) -> None:
    """输出 SOURCE 对应的默认链接名"""
    click.echo(LinkNameResolver.default_name(source))
