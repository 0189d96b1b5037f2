"""链接名解析器

从源路径推导默认链接名，并记录用户是否手动修改过链接名：
- AUTO: 源路径变化时用默认名覆盖链接名
- MANUAL: 用户编辑过链接名，源路径变化不再覆盖
"""

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from linker.core.logger import get_logger

logger = get_logger("link_name_resolver")


class NameMode(Enum):
    """链接名模式"""
    AUTO = "auto"
    MANUAL = "manual"


class LinkNameResolver:
    """链接名解析器"""

    def __init__(self):
        self.mode = NameMode.AUTO
        self.name = ""

    @staticmethod
    def default_name(source: Union[str, Path]) -> str:
        """返回源路径的最后一段

        Args:
            source: 源路径

        Returns:
            默认链接名，末尾的分隔符会被忽略
        """
        text = os.fspath(source).rstrip("/" + os.sep)
        return Path(text).name if text else ""

    @property
    def is_manual(self) -> bool:
        return self.mode == NameMode.MANUAL

    def source_changed(self, new_source: Optional[Union[str, Path]]) -> str:
        """源路径变化

        Args:
            new_source: 新的源路径，None 表示源被清空

        Returns:
            当前链接名
        """
        if new_source is not None and self.mode == NameMode.AUTO:
            self.name = self.default_name(new_source)
            logger.debug("Link name derived from source", name=self.name)
        return self.name

    def name_edited(self, text: str) -> str:
        """用户直接编辑了链接名，切换到 MANUAL"""
        self.name = text
        if self.mode != NameMode.MANUAL:
            logger.debug("Link name switched to manual", name=text)
        self.mode = NameMode.MANUAL
        return self.name

    def clear(self) -> None:
        """回到 AUTO 并清空链接名"""
        self.mode = NameMode.AUTO
        self.name = ""
