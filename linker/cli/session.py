"""建链会话（展示层状态）

保存界面上的临时状态：源路径、目标目录、链接名，以及 is_creating_link、
show_success 这类视图标志。链接名通过 LinkNameResolver 跟随源路径，
直到用户手动编辑为止。
"""

from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Optional, Union

from linker.core.coordinator import OperationCoordinator
from linker.core.data_structures import LinkResult
from linker.core.interfaces import IRevealService
from linker.core.link_name_resolver import LinkNameResolver
from linker.core.logger import get_logger
from linker.core.reveal import NullRevealService

logger = get_logger("session")


class LinkSession:
    """建链会话"""

    def __init__(
        self,
        coordinator: OperationCoordinator,
        reveal_service: Optional[IRevealService] = None,
    ):
        """初始化会话

        Args:
            coordinator: 操作协调器
            reveal_service: 成功后用于定位新链接的服务
        """
        self.coordinator = coordinator
        self.reveal_service = reveal_service or NullRevealService()
        self.resolver = LinkNameResolver()
        self.source: Optional[Path] = None
        self.destination: Optional[Path] = None
        self.is_creating_link = False
        self.show_success = False
        self.last_result: Optional[LinkResult] = None

    @property
    def link_name(self) -> str:
        return self.resolver.name

    @property
    def can_create(self) -> bool:
        """创建按钮是否可用"""
        return (
            self.source is not None
            and self.destination is not None
            and bool(self.link_name)
            and not self.is_creating_link
        )

    def set_source(self, source: Optional[Union[str, Path]]) -> None:
        self.source = Path(source) if source is not None else None
        self.resolver.source_changed(self.source)

    def set_destination(self, destination: Optional[Union[str, Path]]) -> None:
        self.destination = Path(destination) if destination is not None else None

    def edit_link_name(self, text: str) -> None:
        self.resolver.name_edited(text)

    def clear(self) -> None:
        """清空会话"""
        self.source = None
        self.destination = None
        self.resolver.clear()
        self.show_success = False
        self.last_result = None

    def create_link(self, on_complete: Optional[Callable[[LinkResult], None]] = None) -> Optional[Future]:
        """提交建链操作

        Args:
            on_complete: 完成回调，在视图状态更新之后调用

        Returns:
            Future，会话状态不允许创建时返回 None
        """
        if not self.can_create:
            logger.debug("Create requested while disabled")
            return None

        self.is_creating_link = True
        self.show_success = False

        def _finished(result: LinkResult) -> None:
            self.is_creating_link = False
            self.show_success = result.succeeded
            self.last_result = result
            if result.succeeded:
                self._reveal(result.resulting_path)
            if on_complete is not None:
                on_complete(result)

        return self.coordinator.execute(
            self.source,
            self.destination,
            self.link_name,
            callback=_finished,
        )

    def _reveal(self, path: Path) -> None:
        # 链接已经创建，定位失败只记录
        try:
            self.reveal_service.reveal(path)
        except Exception as e:
            logger.warning(
                "Reveal failed",
                path=str(path),
                error_type=type(e).__name__,
                error_message=str(e),
            )
