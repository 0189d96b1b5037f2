"""本地文件系统提供者

基于 os 模块的 IFilesystemProvider 实现。条目类型通过 lstat 判断，
因此符号链接（包括指向不存在目标的链接）总是被识别为 SYMLINK。
"""

import os
import stat
from pathlib import Path

from linker.core.data_structures import EntryKind
from linker.core.interfaces import IFilesystemProvider


class LocalFilesystem(IFilesystemProvider):
    """本地文件系统"""

    def entry_kind(self, path: Path) -> EntryKind:
        try:
            mode = os.lstat(path).st_mode
        except FileNotFoundError:
            return EntryKind.NONE
        except NotADirectoryError:
            # 路径中间某段是文件
            return EntryKind.NONE
        except ValueError:
            # 含 NUL 字符的路径不可能存在
            return EntryKind.NONE

        if stat.S_ISLNK(mode):
            return EntryKind.SYMLINK
        if stat.S_ISDIR(mode):
            return EntryKind.DIRECTORY
        return EntryKind.FILE

    def is_directory(self, path: Path) -> bool:
        return os.path.isdir(path)

    def create_symlink(self, at: Path, pointing_to: Path) -> None:
        # 目录链接在 Windows 上需要 target_is_directory
        os.symlink(
            os.fspath(pointing_to),
            os.fspath(at),
            target_is_directory=os.path.isdir(pointing_to),
        )

    def read_link(self, path: Path) -> Path:
        return Path(os.readlink(path))
