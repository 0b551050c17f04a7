"""
环境探测模块。

封装外部命令的执行，返回去除首尾空白的标准输出。
"""

import subprocess
from typing import List, Optional, Sequence, Union

from nodeman.utils.logger import get_logger
from nodeman.core.interfaces import IEnvironmentProbe

logger = get_logger()


class ProbeError(Exception):
    """环境探测错误异常。"""
    pass


class CommandError(ProbeError):
    """
    命令执行错误异常。

    命令不存在、无法启动或以非零状态退出时抛出。
    """

    def __init__(self, cmd: Union[str, Sequence[str]], message: str,
                 returncode: Optional[int] = None, stderr: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


def _format_cmd(cmd: Union[str, Sequence[str]]) -> str:
    if isinstance(cmd, str):
        return cmd
    return " ".join(cmd)


class EnvironmentProbe(IEnvironmentProbe):
    """
    基于 subprocess 的环境探测器。

    不设置超时，挂起的子进程会阻塞调用方。
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        初始化环境探测器。

        参数:
            timeout: 命令超时秒数，None 表示不限制
        """
        self.timeout = timeout

    def run(self, cmd: List[str]) -> str:
        """
        执行命令并返回标准输出。

        参数:
            cmd: 命令及参数列表

        返回:
            去除首尾空白的标准输出

        抛出:
            CommandError: 命令执行失败
        """
        return self._execute(cmd, shell=False)

    def run_shell(self, command: str) -> str:
        """
        通过 shell 执行命令并返回标准输出。

        参数:
            command: 命令字符串，调用方负责参数的合法性

        返回:
            去除首尾空白的标准输出

        抛出:
            CommandError: 命令执行失败
        """
        return self._execute(command, shell=True)

    def _execute(self, cmd: Union[str, List[str]], shell: bool) -> str:
        display = _format_cmd(cmd)
        logger.debug(f"执行命令: {display}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                shell=shell,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(cmd, f"命令执行超时: {display}") from e
        except UnicodeDecodeError as e:
            raise CommandError(cmd, f"命令 {display} 的输出无法解码: {e}") from e
        except (FileNotFoundError, PermissionError) as e:
            raise CommandError(cmd, f"无法执行命令 {display}: {e}") from e
        except OSError as e:
            raise CommandError(cmd, f"启动命令失败 {display}: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise CommandError(
                cmd,
                f"命令 {display} 退出码为 {result.returncode}: {stderr}",
                returncode=result.returncode,
                stderr=stderr,
            )

        return (result.stdout or "").strip()
