"""
数据模型模块。

定义 Node.js 版本、已安装版本和运行环境的值对象。
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class NodeVersion:
    """Node.js 版本信息。"""
    version: str
    major: int
    minor: int
    patch: int
    lts: Union[str, bool, None] = None
    date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InstalledNodeVersion(NodeVersion):
    """
    已安装的 Node 版本信息。

    每次枚举时重新构建，default 始终为 False（默认版本尚未实现）。
    """
    path: str = ""
    current: bool = False
    default: bool = False


@dataclass(frozen=True)
class NodeEnvironment:
    """当前 Node 环境信息。"""
    node_version: str
    npm_version: str
    node_path: str
    npm_path: str
    arch: str
    platform: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EnvironmentLookup:
    """环境查询结果，区分查询成功与查询失败。"""
    environment: Optional[NodeEnvironment] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.environment is not None


@dataclass(frozen=True)
class VersionScan:
    """
    已安装版本扫描结果。

    error 为 None 表示扫描完成（包括安装目录不存在的情况），
    否则表示扫描中途失败，versions 为空。
    """
    versions: List[InstalledNodeVersion] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
