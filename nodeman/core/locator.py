"""
平台二进制定位模块。

集中处理 Windows 与 POSIX 平台在可执行文件查找和安装目录布局上的差异。
"""

import os
import sys
from typing import Optional

from nodeman.utils.logger import get_logger
from nodeman.utils.input_validator import InputValidator
from nodeman.core.interfaces import IBinaryLocator, IEnvironmentProbe
from nodeman.core.probe import CommandError, EnvironmentProbe

logger = get_logger()

POSIX_LOOKUP = "which"
WINDOWS_LOOKUP = "where"


class BinaryLocator(IBinaryLocator):
    """
    平台二进制定位器。

    POSIX 平台使用 which，Windows 平台使用 where，
    首选命令失败时尝试另一平台的命令。
    """

    def __init__(self, probe: Optional[IEnvironmentProbe] = None, platform: Optional[str] = None):
        """
        初始化平台二进制定位器。

        参数:
            probe: 执行查找命令的环境探测器
            platform: 平台标识，默认为 sys.platform
        """
        self.probe = probe or EnvironmentProbe()
        self._platform = platform or sys.platform

    @property
    def platform(self) -> str:
        return self._platform

    @property
    def is_windows(self) -> bool:
        return self.platform == "win32"

    @property
    def lookup_commands(self) -> tuple:
        if self.is_windows:
            return WINDOWS_LOOKUP, POSIX_LOOKUP
        return POSIX_LOOKUP, WINDOWS_LOOKUP

    def locate(self, name: str) -> str:
        """
        在 PATH 中查找可执行文件。

        参数:
            name: 可执行文件名称

        返回:
            第一个匹配的路径

        抛出:
            CommandError: 两种查找命令都失败
        """
        InputValidator.validate_command_arg(name)
        primary, fallback = self.lookup_commands
        try:
            output = self.probe.run_shell(f"{primary} {name}")
        except CommandError as e:
            logger.debug(f"{primary} {name} 失败，尝试 {fallback}: {e}")
            output = self.probe.run_shell(f"{fallback} {name}")
        return output.split("\n")[0].strip()

    def node_binary_path(self, version_path: str) -> str:
        """
        获取安装目录中 node 可执行文件的预期路径。

        参数:
            version_path: 版本安装目录

        返回:
            Windows 上为 node.exe，其他平台为 bin/node
        """
        if self.is_windows:
            return os.path.join(version_path, "node.exe")
        return os.path.join(version_path, "bin", "node")
