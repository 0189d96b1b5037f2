"""文件浏览器定位服务

建链成功后在系统文件浏览器中选中新链接：
- macOS: open -R <path>
- Windows: explorer /select,<path>
- Linux: xdg-open <父目录>（多数桌面不支持选中单个文件）

失败只记录日志，不影响建链结果。
"""

import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from linker.core.interfaces import IRevealService
from linker.core.logger import get_logger

logger = get_logger("reveal")


class RevealService(IRevealService):
    """文件浏览器定位服务"""

    def __init__(self, platform: Optional[str] = None):
        """初始化定位服务

        Args:
            platform: 平台标识，默认为 sys.platform
        """
        self.platform = platform or sys.platform

    def build_command(self, path: Path) -> List[str]:
        """构建定位命令"""
        if self.platform == 'darwin':
            return ["open", "-R", str(path)]
        if self.platform == 'win32':
            return ["explorer", f"/select,{path}"]
        return ["xdg-open", str(Path(path).parent)]

    def reveal(self, path: Path) -> bool:
        command = self.build_command(path)
        logger.debug("Revealing path", path=str(path), command=command)

        try:
            result = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as e:
            logger.warning("Failed to reveal path", path=str(path), error=str(e))
            return False

        # explorer 即使成功也返回非零退出码
        if result.returncode != 0 and self.platform != 'win32':
            logger.warning(
                "Reveal command failed",
                path=str(path),
                returncode=result.returncode,
                stderr=result.stderr,
            )
            return False

        return True


class NullRevealService(IRevealService):
    """不做任何事的定位服务（reveal.enabled 为 false 或 --no-reveal 时使用）"""

    def reveal(self, path: Path) -> bool:
        return False
