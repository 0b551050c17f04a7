"""
输入验证模块。

提供命令行参数、配置值和命令参数的验证功能。
"""

import re
from typing import Optional

from nodeman.utils.logger import get_logger

logger = get_logger()


class InputValidationError(Exception):
    """输入验证错误异常。"""
    pass


class InputValidator:
    """
    输入验证器类。

    所有验证方法验证通过返回 True，否则抛出 InputValidationError。
    """

    MAX_PATH_LENGTH = 1024
    MAX_VERSION_LENGTH = 100
    VERSION_PATTERN = re.compile(r'^[a-zA-Z0-9.+_-]+$')
    URL_PATTERN = re.compile(
        r'^https?://'
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+'
        r'(?:[A-Z]{2,63}|[A-Z0-9-]{2,})'
        r'|localhost|\d{1,3}(?:\.\d{1,3}){3})'
        r'(?::\d+)?'
        r'(?:/?|[/?]\S+)$',
        re.IGNORECASE
    )
    DANGEROUS_CHARS = [';', '|', '&', '>', '<', '`', '$', '\\', '"', "'", '\n', '\r']

    @classmethod
    def validate_path(cls, path: Optional[str]) -> bool:
        """
        验证路径的有效性。

        参数:
            path: 路径字符串，None 视为未指定

        返回:
            验证通过返回 True
        """
        if path is None:
            return True

        if not path.strip():
            raise InputValidationError("路径不能为空")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise InputValidationError(f"路径不能超过 {cls.MAX_PATH_LENGTH} 个字符")

        if '\x00' in path:
            raise InputValidationError("路径不能包含空字符")

        return True

    @classmethod
    def validate_version_string(cls, version: str) -> bool:
        """
        验证版本号字符串的有效性。

        只检查字符集和长度，语义化版本的解析由 version_utils 负责。

        参数:
            version: 版本号字符串

        返回:
            验证通过返回 True
        """
        if not version or not version.strip():
            raise InputValidationError("版本号不能为空")

        if len(version.strip()) > cls.MAX_VERSION_LENGTH:
            raise InputValidationError(f"版本号不能超过 {cls.MAX_VERSION_LENGTH} 个字符")

        if not cls.VERSION_PATTERN.match(version.strip()):
            raise InputValidationError(f"版本号格式无效: {version}")

        return True

    @classmethod
    def validate_url(cls, url: Optional[str]) -> bool:
        """
        验证 URL 的有效性。

        参数:
            url: URL 字符串，空值视为未指定

        返回:
            验证通过返回 True
        """
        if not url or not url.strip():
            return True

        if not cls.URL_PATTERN.match(url.strip()):
            raise InputValidationError(f"URL 格式无效: {url}")

        return True

    @classmethod
    def validate_command_arg(cls, arg: Optional[str], max_length: int = 1024) -> bool:
        """
        验证传给 shell 的命令参数，防止命令注入。

        参数:
            arg: 命令参数
            max_length: 最大长度

        返回:
            验证通过返回 True
        """
        if arg is None:
            return True

        if len(arg) > max_length:
            raise InputValidationError("命令参数超过最大长度")

        for char in cls.DANGEROUS_CHARS:
            if char in arg:
                logger.warning(f"拒绝包含非法字符的命令参数: {arg!r}")
                raise InputValidationError(f"命令参数包含非法字符: {char!r}")

        return True
