"""linker interactive 命令实现

逐项询问源路径、目标目录和链接名，对应原先拖放窗口的操作流程：
链接名默认跟随源路径，一旦手动修改就不再被覆盖。
"""

from typing import Optional

import click

from linker.core.coordinator import OperationCoordinator
from linker.core.exceptions import ConfigException, PathValidationError
from linker.core.interfaces import IRevealService
from linker.core.logger import get_logger
from linker.core.path_validator import PathValidator
from linker.core.reveal import NullRevealService, RevealService
from linker.cli.session import LinkSession
from linker.cli.utils import (
    InteractivePrompt,
    OutputFormatter,
    format_summary,
    get_formatter,
    load_settings,
)

logger = get_logger("interactive_command")


class InteractiveCommand:
    """交互式建链命令"""

    def __init__(
        self,
        session: LinkSession,
        formatter: Optional[OutputFormatter] = None,
        prompt: Optional[InteractivePrompt] = None,
    ):
        self.session = session
        self.formatter = formatter or OutputFormatter()
        self.prompt = prompt or InteractivePrompt()
        self.validator = PathValidator()
        self.stats = {"created": 0, "failed": 0}

    def ask_source(self) -> None:
        """询问源路径（文件或目录）"""
        while True:
            text = self.prompt.prompt_text("源路径")
            try:
                source = self.validator.validate(text)
            except PathValidationError as e:
                click.echo(self.formatter.format_error(e.error_kind, e.message), err=True)
                continue
            self.session.set_source(source)
            return

    def ask_destination(self) -> None:
        """询问目标目录，只接受目录"""
        while True:
            text = self.prompt.prompt_text("目标目录")
            try:
                destination = self.validator.validate(text, require_directory=True)
            except PathValidationError as e:
                click.echo(self.formatter.format_error(e.error_kind, e.message), err=True)
                continue
            self.session.set_destination(destination)
            return

    def ask_name(self) -> None:
        """询问链接名，直接回车保留当前名字"""
        current = self.session.link_name
        text = self.prompt.prompt_text("链接名", default=current)
        if text != current:
            self.session.edit_link_name(text)

    def run_once(self) -> bool:
        """完成一轮建链，返回是否成功"""
        self.ask_source()
        self.ask_destination()
        self.ask_name()

        future = self.session.create_link()
        if future is None:
            click.echo(self.formatter.error("链接名不能为空"), err=True)
            return False

        result = future.result()
        if result.succeeded:
            click.echo(self.formatter.format_result(result, source=self.session.source))
        else:
            click.echo(self.formatter.format_result(result), err=True)
        return result.succeeded

    def execute(self) -> int:
        """循环建链直到用户退出

        Returns:
            成功创建的链接数
        """
        created = 0
        failed = 0
        while True:
            if self.run_once():
                created += 1
            else:
                failed += 1
            if not self.prompt.confirm("继续创建另一个链接?", default=False):
                break
            self.session.clear()

        self.stats = {"created": created, "failed": failed}
        return created

    def render_summary(self) -> str:
        """生成会话结束时的汇总"""
        return format_summary(
            "建链汇总",
            {"已创建": self.stats["created"], "失败": self.stats["failed"]},
            self.formatter.config,
        )


@click.command(name="interactive")
@click.option("--no-reveal", is_flag=True, help="成功后不在文件浏览器中显示")
@click.pass_context
def interactive(ctx: click.Context, no_reveal: bool) -> None:
    """交互式创建符号链接"""
    try:
        config_manager = load_settings(ctx)
    except ConfigException as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    reveal_service: IRevealService = NullRevealService()
    if not no_reveal and config_manager.get("reveal.enabled", True):
        reveal_service = RevealService()

    with OperationCoordinator() as coordinator:
        session = LinkSession(coordinator, reveal_service)
        cmd = InteractiveCommand(session, formatter=get_formatter(ctx))
        created = cmd.execute()

    logger.info("Interactive session finished", **cmd.stats)
    click.echo(get_formatter(ctx).info(f"共创建 {created} 个链接"))
    click.echo(cmd.render_summary())
