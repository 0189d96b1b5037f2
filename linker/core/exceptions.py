"""Linker 异常体系

每个与建链流程相关的异常都带有 error_kind，协调器据此把异常归类为 LinkResult。"""

from enum import Enum


class ErrorKind(Enum):
    """错误分类"""
    NOT_FOUND = "not_found"
    WRONG_KIND = "wrong_kind"
    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    IO_ERROR = "io_error"
    INVALID_NAME = "invalid_name"


class LinkerException(Exception):
    """基础异常类"""
    error_kind = ErrorKind.IO_ERROR

    def __init__(self, message: str, details=None):
        self.message = message
        self.details = details
        super().__init__(self.message)


# 路径校验相关异常
class PathValidationError(LinkerException):
    """路径校验失败"""
    pass


class PathNotFound(PathValidationError):
    """路径不存在"""
    error_kind = ErrorKind.NOT_FOUND


class WrongEntryKind(PathValidationError):
    """条目类型不符（需要目录却给了文件）"""
    error_kind = ErrorKind.WRONG_KIND


class InvalidLinkName(PathValidationError):
    """链接名为空或包含路径分隔符"""
    error_kind = ErrorKind.INVALID_NAME


# 符号链接创建相关异常
class LinkCreationError(LinkerException):
    """符号链接创建失败"""
    pass


class LinkAlreadyExists(LinkCreationError):
    """目标位置已有条目，拒绝覆盖"""
    error_kind = ErrorKind.ALREADY_EXISTS


class LinkPermissionDenied(LinkCreationError):
    """权限不足"""
    error_kind = ErrorKind.PERMISSION_DENIED


class LinkIOError(LinkCreationError):
    """底层文件系统错误"""
    error_kind = ErrorKind.IO_ERROR


class OperationInProgress(LinkerException):
    """已有建链操作正在进行"""
    pass


# 配置相关异常
class ConfigException(LinkerException):
    """配置异常"""
    pass


class ConfigParseError(ConfigException):
    """配置解析失败"""
    pass


class ConfigIOError(ConfigException):
    """配置文件读写失败"""
    pass


class ConfigValidationError(ConfigException):
    """配置验证失败"""
    pass
