"""文件系统提供者接口定义"""

from abc import ABC, abstractmethod
from pathlib import Path

from linker.core.data_structures import EntryKind


class IFilesystemProvider(ABC):
    """文件系统提供者接口"""

    @abstractmethod
    def entry_kind(self, path: Path) -> EntryKind:
        """获取路径上的条目类型，不存在时返回 EntryKind.NONE"""
        pass

    @abstractmethod
    def is_directory(self, path: Path) -> bool:
        """路径是否为目录（跟随符号链接）"""
        pass

    @abstractmethod
    def create_symlink(self, at: Path, pointing_to: Path) -> None:
        """在 at 处创建指向 pointing_to 的符号链接，失败时抛出 OSError"""
        pass

    @abstractmethod
    def read_link(self, path: Path) -> Path:
        """读取符号链接中保存的路径（不解析）"""
        pass
