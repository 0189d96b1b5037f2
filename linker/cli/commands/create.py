"""linker create 命令实现

在目标目录中创建指向源路径的符号链接。
未指定 --name 时使用源路径的最后一段作为链接名。
"""

from typing import Optional

import click

from linker.core.config_manager import ConfigManager
from linker.core.coordinator import OperationCoordinator
from linker.core.data_structures import LinkResult
from linker.core.exceptions import ConfigException, ErrorKind
from linker.core.interfaces import IRevealService
from linker.core.logger import get_logger
from linker.core.path_validator import PathValidator
from linker.core.reveal import NullRevealService, RevealService
from linker.cli.session import LinkSession
from linker.cli.utils import get_formatter, load_settings

logger = get_logger("create_command")


class CreateCommand:
    """建链命令处理器"""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        coordinator: Optional[OperationCoordinator] = None,
        reveal_service: Optional[IRevealService] = None,
    ):
        """初始化建链命令处理器

        Args:
            config_manager: 配置管理器，决定是否在成功后定位新链接
            coordinator: 操作协调器
            reveal_service: 定位服务，默认按配置选择
        """
        self.config_manager = config_manager or ConfigManager()
        # 自行创建的协调器由本对象负责关闭
        self._owns_coordinator = coordinator is None
        self.coordinator = coordinator or OperationCoordinator()
        if reveal_service is None:
            enabled = self.config_manager.get("reveal.enabled", True)
            reveal_service = RevealService() if enabled else NullRevealService()
        self.reveal_service = reveal_service

    def execute(
        self,
        source: str,
        destination: str,
        name: Optional[str] = None,
        reveal: bool = True,
    ) -> LinkResult:
        """执行建链

        Args:
            source: 源路径，相对当前目录
            destination: 目标目录
            name: 链接名，为空时取源路径最后一段
            reveal: 成功后是否在文件浏览器中定位

        Returns:
            LinkResult
        """
        session = LinkSession(
            self.coordinator,
            self.reveal_service if reveal else NullRevealService(),
        )
        # 与拖放得到的路径一样，源路径总是以绝对路径写入链接
        session.set_source(PathValidator.normalize(source))
        session.set_destination(destination)
        # 空链接名沿用默认名
        if name:
            session.edit_link_name(name)

        logger.debug(
            "Create command prepared",
            source=str(session.source),
            destination=str(session.destination),
            link_name=session.link_name,
        )

        future = session.create_link()
        if future is None:
            return LinkResult.failed(ErrorKind.INVALID_NAME, f"无法从源路径推导链接名: {session.source}")
        return future.result()

    def close(self) -> None:
        """关闭自行创建的协调器，外部传入的协调器不受影响"""
        if self._owns_coordinator:
            self.coordinator.shutdown()

    def __enter__(self) -> 'CreateCommand':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False


@click.command(name="create")
@click.argument("source")
@click.argument("destination")
@click.option("-n", "--name", default=None, help="链接名（默认取源路径的最后一段）")
@click.option("--no-reveal", is_flag=True, help="成功后不在文件浏览器中显示")
@click.pass_context
def create(ctx: click.Context, source: str, destination: str, name: Optional[str], no_reveal: bool) -> None:
    """在 DESTINATION 目录中创建指向 SOURCE 的符号链接"""
    try:
        config_manager = load_settings(ctx)
    except ConfigException as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    formatter = get_formatter(ctx)

    with CreateCommand(config_manager) as cmd:
        result = cmd.execute(source, destination, name=name, reveal=not no_reveal)

    if result.succeeded:
        click.echo(formatter.format_result(result, source=PathValidator.normalize(source)))
    else:
        click.echo(formatter.format_result(result), err=True)
        ctx.exit(1)
