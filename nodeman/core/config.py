"""
配置模块。

提供 Node 版本管理器配置的默认值、合并和 JSON 配置文件加载功能。
"""

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from nodeman.utils.logger import get_logger
from nodeman.utils.input_validator import InputValidator, InputValidationError

logger = get_logger()

DEFAULT_MIRROR = "https://nodejs.org/dist"


class ConfigLoadError(Exception):
    """配置加载错误异常。"""
    pass


def default_install_dir() -> str:
    """
    获取默认的 Node 安装目录。

    返回:
        <用户主目录>/.ldesign/node
    """
    return os.path.join(str(Path.home()), ".ldesign", "node")


@dataclass(frozen=True)
class NodeManagerConfig:
    """
    Node 版本管理器配置。

    构造后不可变，merge() 返回替换了指定字段的新实例。
    mirror 和 proxy 仅作保存，当前没有任何下载功能使用它们。
    """
    install_dir: str = ""
    mirror: str = DEFAULT_MIRROR
    proxy: Optional[str] = None
    verbose: bool = False

    def __post_init__(self):
        if not self.install_dir:
            object.__setattr__(self, "install_dir", default_install_dir())
        if not self.mirror:
            object.__setattr__(self, "mirror", DEFAULT_MIRROR)

    @classmethod
    def field_names(cls) -> set:
        return {f.name for f in fields(cls)}

    def merge(self, overrides: Optional[Mapping[str, Any]] = None) -> "NodeManagerConfig":
        """
        合并部分配置。

        参数:
            overrides: 要覆盖的字段，值为 None 的字段保持原值

        返回:
            新的配置实例
        """
        if not overrides:
            return self
        known = self.field_names()
        changes = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]] = None) -> "NodeManagerConfig":
        """
        从部分配置字典创建配置，未指定的字段使用默认值。

        参数:
            data: 部分配置字典

        返回:
            配置实例
        """
        return cls().merge(data)


ConfigInput = Union[NodeManagerConfig, Mapping[str, Any], None]


def resolve_config(config: ConfigInput) -> NodeManagerConfig:
    """
    将配置参数统一为 NodeManagerConfig。

    参数:
        config: 配置实例、部分配置字典或 None

    返回:
        配置实例
    """
    if config is None:
        return NodeManagerConfig()
    if isinstance(config, NodeManagerConfig):
        return config
    return NodeManagerConfig.from_mapping(config)


_FIELD_TYPES = {
    "install_dir": str,
    "mirror": str,
    "proxy": str,
    "verbose": bool,
}


def _validate_config_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    验证配置文件内容并返回可用字段。

    参数:
        data: 从 JSON 读取的配置字典

    返回:
        过滤后的配置字典
    """
    if not isinstance(data, dict):
        raise ConfigLoadError("配置文件内容必须是 JSON 对象")

    result = {}
    for key, value in data.items():
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            logger.warning(f"忽略未知配置项: {key}")
            continue
        if value is None:
            continue
        if not isinstance(value, expected):
            raise ConfigLoadError(f"配置项 {key} 类型错误，应为 {expected.__name__}")
        result[key] = value

    try:
        InputValidator.validate_path(result.get("install_dir"))
        InputValidator.validate_url(result.get("mirror"))
        InputValidator.validate_url(result.get("proxy"))
    except InputValidationError as e:
        raise ConfigLoadError(f"配置验证失败: {e}") from e

    return result


def load_config_file(path: Union[str, Path], base: Optional[NodeManagerConfig] = None) -> NodeManagerConfig:
    """
    从 JSON 文件加载配置。

    参数:
        path: 配置文件路径
        base: 基础配置，文件中的字段覆盖其同名字段

    返回:
        合并后的配置实例

    抛出:
        ConfigLoadError: 文件无法读取、不是合法 JSON 或字段无效
    """
    config_path = Path(path).expanduser()
    try:
        logger.debug(f"从文件加载配置: {config_path}")
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (IOError, OSError, json.JSONDecodeError) as e:
        raise ConfigLoadError(f"无法加载配置文件 {config_path}: {e}") from e

    overrides = _validate_config_data(data)
    return (base or NodeManagerConfig()).merge(overrides)
