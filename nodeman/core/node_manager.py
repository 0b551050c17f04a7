"""
Node.js 版本管理器模块。

提供当前 Node.js 环境检测、版本解析比较和已安装版本枚举功能。
安装、切换和默认版本设置尚未实现。
"""

import os
import platform
from typing import List, Optional

from nodeman.utils.logger import get_logger
from nodeman.core import version_utils
from nodeman.core.config import ConfigInput, NodeManagerConfig, resolve_config
from nodeman.core.interfaces import IBinaryLocator, IEnvironmentProbe, INodeManager
from nodeman.core.locator import BinaryLocator
from nodeman.core.models import (
    EnvironmentLookup,
    InstalledNodeVersion,
    NodeEnvironment,
    NodeVersion,
    VersionScan,
)
from nodeman.core.probe import EnvironmentProbe, ProbeError

logger = get_logger()

LOG_PREFIX = "[NodeManager]"
RECOMMENDED_NODE_VERSION = "20"

ARCH_MAP = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "ppc64le": "ppc64",
    "s390x": "s390x",
}


class NodeManagerError(Exception):
    """Node 版本管理错误异常。"""
    pass


class EnvironmentQueryError(NodeManagerError):
    """当前 Node 环境无法确定时抛出。"""
    pass


def get_arch() -> str:
    """
    获取 Node.js 风格的 CPU 架构标识。

    返回:
        如 x64、arm64，未知架构返回小写的原始值
    """
    machine = platform.machine().lower()
    return ARCH_MAP.get(machine, machine)


class NodeManager(INodeManager):
    """
    Node.js 版本管理器类。

    配置在构造后不可变，所有操作都是无状态的单次查询，
    每次调用都重新读取文件系统或重新执行命令，不做缓存。
    """

    def __init__(
        self,
        config: ConfigInput = None,
        probe: Optional[IEnvironmentProbe] = None,
        locator: Optional[IBinaryLocator] = None,
    ):
        """
        初始化 Node 版本管理器，不执行任何 I/O。

        参数:
            config: 配置实例或部分配置字典，未指定的字段使用默认值
            probe: 环境探测器，默认使用 subprocess 实现
            locator: 平台二进制定位器，默认按当前平台创建
        """
        self.config: NodeManagerConfig = resolve_config(config)
        self.probe = probe or EnvironmentProbe()
        self.locator = locator or BinaryLocator(self.probe)

    def get_current_environment(self) -> NodeEnvironment:
        """
        获取当前 Node.js 环境信息。

        返回:
            当前环境信息

        抛出:
            EnvironmentQueryError: 任一命令执行失败
        """
        try:
            node_version = self.probe.run(["node", "--version"])
            npm_version = self.probe.run(["npm", "--version"])
            node_path = self.locator.locate("node")
            npm_path = self.locator.locate("npm")
        except Exception as e:
            raise EnvironmentQueryError(f"获取 Node 环境信息失败: {e}") from e

        return NodeEnvironment(
            node_version=node_version.strip(),
            npm_version=npm_version.strip(),
            node_path=node_path.split("\n")[0].strip(),
            npm_path=npm_path.split("\n")[0].strip(),
            arch=get_arch(),
            platform=self.locator.platform,
        )

    def try_get_current_environment(self) -> EnvironmentLookup:
        """
        获取当前 Node.js 环境信息，失败时不抛出。

        返回:
            包含环境信息或错误的查询结果
        """
        try:
            return EnvironmentLookup(environment=self.get_current_environment())
        except EnvironmentQueryError as e:
            self._log(f"无法获取当前 Node 环境: {e}")
            return EnvironmentLookup(error=e)

    def parse_version(self, version_str: str) -> Optional[NodeVersion]:
        return version_utils.parse_version(version_str)

    def compare_versions(self, v1: str, v2: str) -> int:
        return version_utils.compare_versions(v1, v2)

    def satisfies_version(self, version: str, range_: str) -> bool:
        return version_utils.satisfies_version(version, range_)

    def scan_installed_versions(self) -> VersionScan:
        """
        扫描安装目录下的 Node 版本。

        安装目录不存在时返回空的成功结果；扫描中途出错时返回带错误的空结果。

        返回:
            扫描结果，版本按降序排列
        """
        install_dir = self.config.install_dir
        try:
            if not os.path.exists(install_dir):
                self._log(f"安装目录不存在: {install_dir}")
                return VersionScan()

            lookup = self.try_get_current_environment()
            current_version = lookup.environment.node_version if lookup.ok else None

            versions = []
            with os.scandir(install_dir) as entries:
                for entry in entries:
                    if not entry.is_dir(follow_symlinks=False) or not entry.name.startswith("v"):
                        continue
                    version_info = self.parse_version(entry.name)
                    if version_info is None:
                        continue
                    versions.append(InstalledNodeVersion(
                        **version_info.to_dict(),
                        path=os.path.join(install_dir, entry.name),
                        current=current_version == entry.name,
                        default=False,
                    ))

            self._log(f"在 {install_dir} 中找到 {len(versions)} 个 Node 版本")
            return VersionScan(versions=version_utils.sort_versions_desc(versions))
        except Exception as e:
            if self.config.verbose:
                self._error("获取已安装版本失败:", e)
            return VersionScan(error=e)

    def get_installed_versions(self) -> List[InstalledNodeVersion]:
        """
        获取已安装的 Node 版本列表。

        返回:
            按版本降序排列的列表，目录不存在或扫描失败时为空列表
        """
        return self.scan_installed_versions().versions

    def is_version_installed(self, version: str) -> bool:
        """
        检查版本是否已安装。

        参数:
            version: 规范版本字符串（如 v20.0.0），按字符串精确匹配

        返回:
            已安装返回 True
        """
        return any(v.version == version for v in self.get_installed_versions())

    def get_version_path(self, version: str) -> str:
        return os.path.join(self.config.install_dir, version)

    def validate_installation(self, version_path: str) -> bool:
        """
        验证 Node 安装是否可用。

        参数:
            version_path: 版本安装目录

        返回:
            node 可执行文件存在且 --version 输出以 'v' 开头时返回 True
        """
        bin_path = self.locator.node_binary_path(version_path)
        if not os.path.exists(bin_path):
            self._log(f"未找到 node 可执行文件: {bin_path}")
            return False

        try:
            output = self.probe.run([bin_path, "--version"])
        except (ProbeError, OSError, ValueError) as e:
            self._log(f"执行 {bin_path} 失败: {e}")
            return False
        return output.strip().startswith("v")

    def _log(self, message: str) -> None:
        if self.config.verbose:
            logger.info(f"{LOG_PREFIX} {message}")

    def _error(self, message: str, error: Optional[BaseException] = None) -> None:
        logger.error(f"{LOG_PREFIX} {message} {error or ''}".rstrip())


def create_node_manager(
    config: ConfigInput = None,
    probe: Optional[IEnvironmentProbe] = None,
    locator: Optional[IBinaryLocator] = None,
) -> NodeManager:
    """
    创建 Node 版本管理器实例。

    参数:
        config: 配置实例或部分配置字典
        probe: 环境探测器
        locator: 平台二进制定位器

    返回:
        NodeManager 实例
    """
    return NodeManager(config, probe=probe, locator=locator)


def get_current_node_version(probe: Optional[IEnvironmentProbe] = None) -> str:
    """
    获取当前 Node 版本。

    参数:
        probe: 环境探测器

    返回:
        node --version 的输出，如 v20.11.1

    抛出:
        NodeManagerError: node 命令执行失败
    """
    probe = probe or EnvironmentProbe()
    try:
        return probe.run(["node", "--version"]).strip()
    except (ProbeError, OSError, ValueError) as e:
        raise NodeManagerError(f"获取 Node 版本失败: {e}") from e


def is_node_installed(probe: Optional[IEnvironmentProbe] = None) -> bool:
    """
    检查 Node 是否已安装，不会抛出异常。

    参数:
        probe: 环境探测器

    返回:
        node --version 执行成功返回 True
    """
    probe = probe or EnvironmentProbe()
    try:
        probe.run(["node", "--version"])
        return True
    except Exception:
        return False


def get_recommended_node_version() -> str:
    """
    获取推荐的 Node 主版本号。

    返回:
        当前 LTS 主版本号
    """
    return RECOMMENDED_NODE_VERSION
