"""符号链接创建器

在 destination_dir / link_name 处创建指向 source 的符号链接。

覆盖保护：目标位置只要存在任何条目（文件、目录、符号链接、失效链接）
就拒绝创建，文件系统保持不变。链接中保存的是 source 原样的路径，
不做 resolve，相对路径和绝对路径的语义都被保留。
"""

from pathlib import Path
from typing import Optional

from linker.core.data_structures import EntryKind, LinkRequest
from linker.core.exceptions import (
    LinkAlreadyExists,
    LinkIOError,
    LinkPermissionDenied,
)
from linker.core.filesystem import LocalFilesystem
from linker.core.interfaces import IFilesystemProvider
from linker.core.logger import get_logger

logger = get_logger("symlink_creator")


class SymlinkCreator:
    """符号链接创建器"""

    def __init__(self, filesystem: Optional[IFilesystemProvider] = None):
        """初始化符号链接创建器

        Args:
            filesystem: 文件系统提供者，默认使用本地文件系统
        """
        self.filesystem = filesystem or LocalFilesystem()

    def create_link(self, request: LinkRequest) -> Path:
        """创建符号链接

        Args:
            request: 建链请求

        Returns:
            新建的符号链接路径

        Raises:
            LinkAlreadyExists: 目标位置已有条目
            LinkPermissionDenied: 权限不足
            LinkIOError: 其他文件系统错误
        """
        target = request.target

        logger.info(
            "Creating symlink",
            source=str(request.source),
            target=str(target),
        )

        existing = self.filesystem.entry_kind(target)
        if existing != EntryKind.NONE:
            logger.warning(
                "Refusing to overwrite existing entry",
                target=str(target),
                kind=existing.value,
            )
            raise LinkAlreadyExists(
                f"目标已存在，拒绝覆盖: {target}",
                details={"target": str(target), "kind": existing.value},
            )

        try:
            self.filesystem.create_symlink(target, request.source)
        except FileExistsError as e:
            # 检查之后被其他进程抢先创建
            raise LinkAlreadyExists(
                f"目标已存在，拒绝覆盖: {target}",
                details={"target": str(target), "error": str(e)},
            )
        except PermissionError as e:
            raise LinkPermissionDenied(
                f"权限不足，无法创建符号链接: {e.strerror or e}",
                details={"target": str(target), "error": str(e)},
            )
        except OSError as e:
            raise LinkIOError(
                f"创建符号链接失败: {e.strerror or e}",
                details={"source": str(request.source), "target": str(target), "error": str(e)},
            )

        logger.info(
            "Symlink created successfully",
            source=str(request.source),
            target=str(target),
        )
        return target

    def read_target(self, link: Path) -> Path:
        """读取符号链接中保存的路径"""
        return self.filesystem.read_link(link)
