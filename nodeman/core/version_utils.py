"""
版本工具模块。

基于 semantic_version 提供版本号解析、比较、范围匹配、排序和分组等工具函数。
"""

import functools
from typing import Any, Dict, List, Optional, Sequence

import semantic_version

from nodeman.core.models import NodeVersion


def strip_v(version_str: str) -> str:
    """
    移除版本字符串的单个 'v' 前缀。

    参数:
        version_str: 版本字符串

    返回:
        去除前缀后的字符串
    """
    if version_str.startswith("v"):
        return version_str[1:]
    return version_str


def _to_version(version_str: str) -> semantic_version.Version:
    """
    将版本字符串解析为 semantic_version.Version。

    先移除 'v' 前缀，再去除首尾空白，之后仍接受一个 'v' 前缀。

    参数:
        version_str: 版本字符串

    返回:
        已解析的版本

    抛出:
        ValueError: 不是合法语义化版本
    """
    return semantic_version.Version(strip_v(strip_v(version_str).strip()))


def canonical_version(version: semantic_version.Version) -> str:
    """
    生成带 'v' 前缀的规范版本字符串，构建元数据不保留。

    参数:
        version: 已解析的版本

    返回:
        形如 v20.1.0 或 v21.0.0-rc.1 的字符串
    """
    text = f"v{version.major}.{version.minor}.{version.patch}"
    if version.prerelease:
        text += "-" + ".".join(version.prerelease)
    return text


def parse_version(version_str: str) -> Optional[NodeVersion]:
    """
    解析版本字符串。

    参数:
        version_str: 版本字符串，可带 'v' 前缀

    返回:
        版本信息，不是合法语义化版本时返回 None
    """
    try:
        parsed = _to_version(version_str)
    except ValueError:
        return None

    return NodeVersion(
        version=canonical_version(parsed),
        major=parsed.major,
        minor=parsed.minor,
        patch=parsed.patch,
    )


def compare_versions(v1: str, v2: str) -> int:
    """
    比较两个版本。

    参数:
        v1: 第一个版本，可带 'v' 前缀
        v2: 第二个版本，可带 'v' 前缀

    返回:
        v1 < v2 返回 -1，相等返回 0，v1 > v2 返回 1，构建元数据不参与比较

    抛出:
        ValueError: 任一版本不是合法语义化版本
    """
    left = _to_version(v1).truncate("prerelease")
    right = _to_version(v2).truncate("prerelease")
    return (left > right) - (left < right)


def satisfies_version(version: str, range_: str) -> bool:
    """
    检查版本是否满足 npm 风格的范围表达式（如 >=18、^20.1.0）。

    参数:
        version: 版本，可带 'v' 前缀
        range_: 范围表达式

    返回:
        满足返回 True，否则返回 False

    抛出:
        ValueError: 版本或范围表达式无效
    """
    return _to_version(version) in semantic_version.NpmSpec(range_)


def sort_versions_desc(versions: Sequence[NodeVersion]) -> List[NodeVersion]:
    """
    按版本号降序排列版本列表，最新版本在前。

    参数:
        versions: 版本信息列表

    返回:
        排序后的版本列表
    """
    return sorted(
        versions,
        key=functools.cmp_to_key(lambda a, b: compare_versions(b.version, a.version)),
    )


def group_versions_by_major(versions: Sequence[NodeVersion]) -> List[Dict[str, Any]]:
    """
    按主版本号分组版本列表。

    参数:
        versions: 版本信息列表

    返回:
        分组后的列表，按主版本号降序，每个分组包含 major_version、versions 和 has_lts
    """
    groups: Dict[int, Dict[str, Any]] = {}

    for v in sort_versions_desc(versions):
        if v.major not in groups:
            groups[v.major] = {
                "major_version": v.major,
                "versions": [],
                "has_lts": False,
            }

        groups[v.major]["versions"].append(v)
        if v.lts:
            groups[v.major]["has_lts"] = True

    return [groups[major] for major in sorted(groups, reverse=True)]
