"""
核心模块抽象接口定义。

定义环境探测器、平台二进制定位器和 Node 版本管理器的抽象接口。
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from nodeman.core.models import (
    EnvironmentLookup,
    InstalledNodeVersion,
    NodeEnvironment,
    NodeVersion,
    VersionScan,
)


class IEnvironmentProbe(ABC):
    """环境探测器抽象接口。"""

    @abstractmethod
    def run(self, cmd: List[str]) -> str:
        """执行命令并返回去除首尾空白的标准输出。"""
        pass

    @abstractmethod
    def run_shell(self, command: str) -> str:
        """通过 shell 执行命令并返回去除首尾空白的标准输出。"""
        pass


class IBinaryLocator(ABC):
    """平台二进制定位器抽象接口。"""

    @property
    @abstractmethod
    def platform(self) -> str:
        """平台标识，取值同 sys.platform。"""
        pass

    @property
    @abstractmethod
    def is_windows(self) -> bool:
        """当前平台是否为 Windows。"""
        pass

    @abstractmethod
    def locate(self, name: str) -> str:
        """在 PATH 中查找可执行文件，返回第一个匹配路径。"""
        pass

    @abstractmethod
    def node_binary_path(self, version_path: str) -> str:
        """返回安装目录中 node 可执行文件的预期路径。"""
        pass


class INodeManager(ABC):
    """Node 版本管理器抽象接口。"""

    @abstractmethod
    def get_current_environment(self) -> NodeEnvironment:
        """获取当前 Node.js 环境信息。"""
        pass

    @abstractmethod
    def try_get_current_environment(self) -> EnvironmentLookup:
        """获取当前 Node.js 环境信息，失败时返回错误而不抛出。"""
        pass

    @abstractmethod
    def parse_version(self, version_str: str) -> Optional[NodeVersion]:
        """解析版本字符串。"""
        pass

    @abstractmethod
    def compare_versions(self, v1: str, v2: str) -> int:
        """比较两个版本。"""
        pass

    @abstractmethod
    def satisfies_version(self, version: str, range_: str) -> bool:
        """检查版本是否满足范围要求。"""
        pass

    @abstractmethod
    def get_installed_versions(self) -> List[InstalledNodeVersion]:
        """获取已安装的 Node 版本列表。"""
        pass

    @abstractmethod
    def scan_installed_versions(self) -> VersionScan:
        """扫描已安装的 Node 版本并保留扫描错误。"""
        pass

    @abstractmethod
    def is_version_installed(self, version: str) -> bool:
        """检查版本是否已安装。"""
        pass

    @abstractmethod
    def get_version_path(self, version: str) -> str:
        """获取版本安装路径。"""
        pass

    @abstractmethod
    def validate_installation(self, version_path: str) -> bool:
        """验证 Node 安装是否可用。"""
        pass
