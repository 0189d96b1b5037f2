"""路径校验器

在建链前检查源路径与目标目录。只读取文件系统元数据，不做任何修改；
校验与实际使用之间可能存在竞争，调用方需要容忍。
"""

import os
from pathlib import Path
from typing import Optional, Union

from linker.core.data_structures import EntryKind, PathInfo, check_link_name
from linker.core.exceptions import PathNotFound, WrongEntryKind
from linker.core.filesystem import LocalFilesystem
from linker.core.interfaces import IFilesystemProvider
from linker.core.logger import get_logger

logger = get_logger("path_validator")


class PathValidator:
    """路径校验器"""

    def __init__(self, filesystem: Optional[IFilesystemProvider] = None):
        """初始化路径校验器

        Args:
            filesystem: 文件系统提供者，默认使用本地文件系统
        """
        self.filesystem = filesystem or LocalFilesystem()

    @staticmethod
    def normalize(path: Union[str, Path]) -> Path:
        """规范化路径

        展开 ~ 并转换为绝对路径，但不解析符号链接，也不按文本折叠 ..。
        目录本身是符号链接时，dir/.. 指向真实父目录而不是文本上的父目录。

        Args:
            path: 原始路径

        Returns:
            绝对路径
        """
        return Path(os.path.expanduser(os.fspath(path))).absolute()

    def inspect(self, path: Union[str, Path]) -> PathInfo:
        """获取路径信息，不抛出异常"""
        normalized = self.normalize(path)
        return PathInfo(path=normalized, kind=self.filesystem.entry_kind(normalized))

    def validate(self, path: Union[str, Path], require_directory: bool = False) -> Path:
        """校验路径

        Args:
            path: 待校验路径
            require_directory: 是否要求为目录（指向目录的符号链接也视为目录）

        Returns:
            规范化后的路径

        Raises:
            PathNotFound: 路径上不存在任何条目
            WrongEntryKind: 要求目录但条目不是目录
        """
        info = self.inspect(path)

        logger.debug(
            "Validating path",
            path=str(info.path),
            kind=info.kind.value,
            require_directory=require_directory,
        )

        if not info.exists:
            raise PathNotFound(
                f"路径不存在: {info.path}",
                details={"path": str(info.path)},
            )

        if require_directory and not self._is_directory(info):
            raise WrongEntryKind(
                f"不是目录: {info.path}",
                details={"path": str(info.path), "kind": info.kind.value},
            )

        return info.path

    def validate_link_name(self, link_name: str) -> str:
        """校验链接名

        Raises:
            InvalidLinkName: 链接名为空或包含路径分隔符
        """
        return check_link_name(link_name)

    def _is_directory(self, info: PathInfo) -> bool:
        if info.kind == EntryKind.DIRECTORY:
            return True
        if info.kind == EntryKind.SYMLINK:
            return self.filesystem.is_directory(info.path)
        return False
