"""Linker 核心模块接口定义"""

from .filesystem import IFilesystemProvider
from .reveal import IRevealService

__all__ = [
    'IFilesystemProvider',
    'IRevealService',
]
