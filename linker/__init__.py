"""Linker - 符号链接创建工具"""

__version__ = "0.1.0"
