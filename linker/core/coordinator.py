"""建链操作协调器

按顺序执行：校验源路径 -> 校验目标目录 -> 校验链接名 -> 创建符号链接。
第一个失败的步骤直接结束流程，不会调用 SymlinkCreator。

所有错误都在这里转换为 LinkResult，不会抛出到调用方。
execute() 把操作交给单个后台线程执行，返回 Future，完成回调只触发一次。
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional, Union

from linker.core.data_structures import LinkRequest, LinkResult
from linker.core.exceptions import ErrorKind, LinkerException, OperationInProgress
from linker.core.interfaces import IFilesystemProvider
from linker.core.filesystem import LocalFilesystem
from linker.core.logger import OperationTracer, get_logger
from linker.core.path_validator import PathValidator
from linker.core.symlink_creator import SymlinkCreator

logger = get_logger("coordinator")

PathLike = Union[str, Path]
CompletionCallback = Callable[[LinkResult], None]


class OperationCoordinator:
    """建链操作协调器

    同一时间只允许一个操作在进行中。
    """

    def __init__(
        self,
        filesystem: Optional[IFilesystemProvider] = None,
        validator: Optional[PathValidator] = None,
        creator: Optional[SymlinkCreator] = None,
    ):
        """初始化协调器

        Args:
            filesystem: 文件系统提供者，validator/creator 未给出时用于构建它们
            validator: 路径校验器
            creator: 符号链接创建器
        """
        fs = filesystem or LocalFilesystem()
        self.validator = validator or PathValidator(fs)
        self.creator = creator or SymlinkCreator(fs)
        self.tracer = OperationTracer(logger)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="linker")
        self._lock = threading.Lock()
        self._in_flight: Optional[Future] = None

    @property
    def in_flight(self) -> bool:
        """是否有操作正在进行"""
        with self._lock:
            return self._in_flight is not None and not self._in_flight.done()

    def run(self, source: PathLike, destination_dir: PathLike, link_name: str) -> LinkResult:
        """同步执行一次建链

        Args:
            source: 源路径，按原样写入链接；相对路径相对于目标目录解释
            destination_dir: 目标目录
            link_name: 链接名

        Returns:
            LinkResult
        """
        op_id = self.tracer.start_operation(
            "create_link",
            source=str(source),
            destination_dir=str(destination_dir),
            link_name=link_name,
        )

        try:
            result = self._run_steps(source, destination_dir, link_name)
        except LinkerException as e:
            result = LinkResult.failed(e.error_kind, e.message)
        except PermissionError as e:
            # 校验阶段读取元数据时也可能遇到
            result = LinkResult.failed(ErrorKind.PERMISSION_DENIED, str(e))
        except (OSError, ValueError) as e:
            # ValueError 来自 os 层拒绝的路径，例如嵌入的 NUL 字符
            self.tracer.record_exception(op_id, e)
            result = LinkResult.failed(ErrorKind.IO_ERROR, str(e))

        if result.succeeded:
            self.tracer.end_operation(op_id, "success", path=str(result.resulting_path))
        else:
            self.tracer.end_operation(
                op_id,
                "failure",
                error_kind=result.error_kind.value,
                error_message=result.message,
            )
        return result

    def execute(
        self,
        source: PathLike,
        destination_dir: PathLike,
        link_name: str,
        callback: Optional[CompletionCallback] = None,
    ) -> 'Future[LinkResult]':
        """在后台线程执行建链

        Args:
            source: 源路径
            destination_dir: 目标目录
            link_name: 链接名
            callback: 完成回调，以 LinkResult 调用一次

        Returns:
            结果为 LinkResult 的 Future

        Raises:
            OperationInProgress: 已有操作正在进行
        """
        with self._lock:
            if self._in_flight is not None and not self._in_flight.done():
                raise OperationInProgress("已有建链操作正在进行")
            future = self._executor.submit(
                self._run_and_notify, source, destination_dir, link_name, callback
            )
            self._in_flight = future

        return future

    def shutdown(self, wait: bool = True) -> None:
        """关闭后台线程，等待进行中的操作完成"""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> 'OperationCoordinator':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.shutdown()
        return False

    def _run_and_notify(
        self,
        source: PathLike,
        destination_dir: PathLike,
        link_name: str,
        callback: Optional[CompletionCallback],
    ) -> LinkResult:
        # 回调在 Future 完成之前执行，future.result() 返回时回调已经结束
        result = self.run(source, destination_dir, link_name)
        if callback is not None:
            callback(result)
        return result

    def _run_steps(self, source: PathLike, destination_dir: PathLike, link_name: str) -> LinkResult:
        source_path = Path(source)

        # 相对源路径按链接所在目录解释，与链接最终的解析方式一致；
        # normalize 不折叠 ..，由内核沿真实目录解析
        if source_path.is_absolute():
            self.validator.validate(source_path)
        else:
            self.validator.validate(self.validator.normalize(destination_dir) / source_path)

        destination = self.validator.validate(destination_dir, require_directory=True)
        self.validator.validate_link_name(link_name)

        request = LinkRequest(
            source=source_path,
            destination_dir=destination,
            link_name=link_name,
        )
        return LinkResult.created(self.creator.create_link(request))
