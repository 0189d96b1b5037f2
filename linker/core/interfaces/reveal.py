"""文件浏览器定位接口定义"""

from abc import ABC, abstractmethod
from pathlib import Path


class IRevealService(ABC):
    """在文件浏览器中显示路径的服务接口"""

    @abstractmethod
    def reveal(self, path: Path) -> bool:
        """在文件浏览器中选中 path，失败返回 False 而不抛出"""
        pass
