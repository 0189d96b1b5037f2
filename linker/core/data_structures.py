"""Linker 核心数据结构定义

定义建链流程中流转的值对象：PathInfo、LinkRequest、LinkResult。"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from linker.core.exceptions import ErrorKind, InvalidLinkName


class EntryKind(Enum):
    """文件系统条目类型"""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    NONE = "none"


def _separators():
    seps = {"/", os.sep}
    if os.altsep:
        seps.add(os.altsep)
    return seps


def check_link_name(link_name: str) -> str:
    """校验链接名

    Args:
        link_name: 链接名

    Returns:
        原样返回的链接名

    Raises:
        InvalidLinkName: 链接名为空、为 . / .. 或包含路径分隔符、NUL 字符
    """
    if not link_name:
        raise InvalidLinkName("链接名不能为空")

    if "\x00" in link_name:
        raise InvalidLinkName(
            f"链接名不能包含 NUL 字符: {link_name!r}",
            details={"link_name": link_name},
        )

    if link_name in (".", ".."):
        raise InvalidLinkName(
            f"链接名无效: {link_name}",
            details={"link_name": link_name},
        )

    if any(sep in link_name for sep in _separators()):
        raise InvalidLinkName(
            f"链接名不能包含路径分隔符: {link_name}",
            details={"link_name": link_name},
        )

    return link_name


@dataclass(frozen=True)
class PathInfo:
    """路径信息"""
    path: Path
    kind: EntryKind

    @property
    def exists(self) -> bool:
        """路径上是否存在条目"""
        return self.kind != EntryKind.NONE

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'path': str(self.path),
            'kind': self.kind.value,
            'exists': self.exists,
        }


@dataclass(frozen=True)
class LinkRequest:
    """一次建链请求

    每次操作新建，构造后不可修改，由协调器消费一次。
    """
    source: Path
    destination_dir: Path
    link_name: str

    def __post_init__(self):
        check_link_name(self.link_name)

    @property
    def target(self) -> Path:
        """将要创建的符号链接路径"""
        return self.destination_dir / self.link_name

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source': str(self.source),
            'destination_dir': str(self.destination_dir),
            'link_name': self.link_name,
        }


@dataclass(frozen=True)
class LinkResult:
    """建链结果：Created(resulting_path) 或 Failed(error_kind)"""
    resulting_path: Optional[Path] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def created(cls, resulting_path: Path) -> 'LinkResult':
        return cls(resulting_path=resulting_path)

    @classmethod
    def failed(cls, error_kind: ErrorKind, message: str = "") -> 'LinkResult':
        return cls(error_kind=error_kind, message=message)

    @property
    def succeeded(self) -> bool:
        """是否创建成功"""
        return self.error_kind is None

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        if self.succeeded:
            return {
                'status': 'created',
                'path': str(self.resulting_path),
            }
        return {
            'status': 'failed',
            'error_kind': self.error_kind.value,
            'message': self.message,
        }
