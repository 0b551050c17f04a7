"""
nodeman 核心模块。

提供配置、环境探测、平台二进制定位和 Node 版本管理功能。
"""

from .interfaces import IEnvironmentProbe, IBinaryLocator, INodeManager
from .models import NodeVersion, InstalledNodeVersion, NodeEnvironment, EnvironmentLookup, VersionScan
from .config import NodeManagerConfig, ConfigLoadError, load_config_file, DEFAULT_MIRROR
from .probe import EnvironmentProbe, ProbeError, CommandError
from .locator import BinaryLocator
from .node_manager import (
    NodeManager,
    NodeManagerError,
    EnvironmentQueryError,
    create_node_manager,
    get_current_node_version,
    is_node_installed,
    get_recommended_node_version,
)
from . import version_utils

__all__ = [
    "IEnvironmentProbe", "IBinaryLocator", "INodeManager",
    "NodeVersion", "InstalledNodeVersion", "NodeEnvironment", "EnvironmentLookup", "VersionScan",
    "NodeManagerConfig", "ConfigLoadError", "load_config_file", "DEFAULT_MIRROR",
    "EnvironmentProbe", "ProbeError", "CommandError",
    "BinaryLocator",
    "NodeManager", "NodeManagerError", "EnvironmentQueryError",
    "create_node_manager", "get_current_node_version", "is_node_installed", "get_recommended_node_version",
    "version_utils",
]
