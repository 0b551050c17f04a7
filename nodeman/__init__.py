"""
nodeman: Node.js 版本检测工具。

检测当前 Node/npm 环境，枚举安装目录下的 Node 版本，并提供版本解析和比较功能。
"""

from nodeman.core import (
    NodeManager,
    NodeManagerConfig,
    NodeManagerError,
    EnvironmentQueryError,
    NodeVersion,
    InstalledNodeVersion,
    NodeEnvironment,
    create_node_manager,
    get_current_node_version,
    is_node_installed,
    get_recommended_node_version,
)

__version__ = "0.1.0"

__all__ = [
    "NodeManager",
    "NodeManagerConfig",
    "NodeManagerError",
    "EnvironmentQueryError",
    "NodeVersion",
    "InstalledNodeVersion",
    "NodeEnvironment",
    "create_node_manager",
    "get_current_node_version",
    "is_node_installed",
    "get_recommended_node_version",
    "__version__",
]
