"""
nodeman 命令行接口模块。
"""

import argparse
import json
from typing import Optional

from nodeman import __version__
from nodeman.core.config import ConfigLoadError, NodeManagerConfig, load_config_file
from nodeman.core.node_manager import (
    EnvironmentQueryError,
    NodeManager,
    get_recommended_node_version,
)
from nodeman.core import version_utils
from nodeman.utils.logger import get_logger, setup_logger
from nodeman.utils.input_validator import InputValidator, InputValidationError

logger = get_logger()

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def create_parser() -> argparse.ArgumentParser:
    """
    创建并配置命令行参数解析器。

    返回:
        配置好的 ArgumentParser 实例
    """
    parser = argparse.ArgumentParser(
        prog="nodeman",
        description="nodeman - Node.js 版本检测工具",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  nodeman env                       显示当前 Node/npm 环境
  nodeman list                      列出已安装的 Node 版本
  nodeman compare v18.0.0 v20.0.0   比较两个版本
  nodeman satisfies v20.1.0 ">=18"  检查版本是否满足范围
  nodeman validate ~/.ldesign/node/v20.0.0
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="启用详细输出",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="JSON 配置文件路径",
    )
    parser.add_argument(
        "--install-dir",
        "-d",
        type=str,
        default=None,
        help="Node 安装目录（默认 ~/.ldesign/node）",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="同时将日志写入 ~/.ldesign/logs/nodeman.log",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="命令",
        description="可用的 CLI 命令",
    )

    env_parser = subparsers.add_parser("env", help="显示当前 Node/npm 环境")
    env_parser.add_argument(
        "--format",
        "-f",
        choices=["json", "simple"],
        default="simple",
        help="输出格式",
    )

    list_parser = subparsers.add_parser("list", help="列出已安装的 Node 版本")
    list_parser.add_argument(
        "--format",
        "-f",
        choices=["json", "simple"],
        default="simple",
        help="输出格式",
    )
    list_parser.add_argument(
        "--group",
        "-g",
        action="store_true",
        help="按主版本号分组显示",
    )

    parse_parser = subparsers.add_parser("parse", help="解析版本字符串")
    parse_parser.add_argument("version", help="版本字符串，如 v20.1.0")

    compare_parser = subparsers.add_parser("compare", help="比较两个版本")
    compare_parser.add_argument("v1", help="第一个版本")
    compare_parser.add_argument("v2", help="第二个版本")

    satisfies_parser = subparsers.add_parser("satisfies", help="检查版本是否满足范围")
    satisfies_parser.add_argument("version", help="版本字符串")
    satisfies_parser.add_argument("range", help="npm 风格的范围表达式，如 >=18")

    installed_parser = subparsers.add_parser("installed", help="检查版本是否已安装")
    installed_parser.add_argument("version", help="规范版本字符串，如 v20.0.0")

    path_parser = subparsers.add_parser("path", help="显示版本的安装路径")
    path_parser.add_argument("version", help="规范版本字符串，如 v20.0.0")

    validate_parser = subparsers.add_parser("validate", help="验证 Node 安装目录")
    validate_parser.add_argument("path", help="版本安装目录")

    subparsers.add_parser("recommended", help="显示推荐的 Node 主版本号")

    return parser


def build_config(args: argparse.Namespace) -> NodeManagerConfig:
    """
    根据命令行参数构建配置，命令行参数覆盖配置文件。

    参数:
        args: 解析后的命令行参数

    返回:
        配置实例
    """
    config = NodeManagerConfig()
    if args.config:
        config = load_config_file(args.config, base=config)
    if args.install_dir:
        InputValidator.validate_path(args.install_dir)
    return config.merge({
        "install_dir": args.install_dir,
        "verbose": True if args.verbose else None,
    })


def run_cli(args: argparse.Namespace, manager: Optional[NodeManager] = None) -> int:
    """
    运行命令行接口。

    参数:
        args: 解析后的命令行参数
        manager: 预先创建的管理器实例，默认根据参数创建

    返回:
        退出码（0 表示成功）
    """
    if args.verbose or args.log_file:
        setup_logger(verbose=args.verbose, log_file=args.log_file)

    if args.command is None:
        print("未指定命令。使用 --help 查看帮助信息。")
        return EXIT_FAILURE

    command_handlers = {
        "env": handle_env,
        "list": handle_list,
        "parse": handle_parse,
        "compare": handle_compare,
        "satisfies": handle_satisfies,
        "installed": handle_installed,
        "path": handle_path,
        "validate": handle_validate,
        "recommended": handle_recommended,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        print(f"未知命令: {args.command}")
        return EXIT_FAILURE

    try:
        if manager is None:
            manager = NodeManager(build_config(args))
        return handler(args, manager)
    except ConfigLoadError as e:
        logger.error(f"加载配置失败: {e}")
        print(f"加载配置失败: {e}")
        return EXIT_USAGE
    except (InputValidationError, ValueError) as e:
        print(f"参数无效: {e}")
        return EXIT_USAGE


def handle_env(args: argparse.Namespace, manager: NodeManager) -> int:
    """
    处理 env 命令：显示当前 Node/npm 环境。

    参数:
        args: 解析后的命令行参数
        manager: Node 版本管理器

    返回:
        退出码
    """
    try:
        env = manager.get_current_environment()
    except EnvironmentQueryError as e:
        print(f"无法获取 Node 环境: {e}")
        return EXIT_FAILURE

    if args.format == "json":
        print(json.dumps(env.to_dict(), indent=2))
    else:
        print(f"Node:  {env.node_version} ({env.node_path})")
        print(f"npm:   {env.npm_version} ({env.npm_path})")
        print(f"平台:  {env.platform} {env.arch}")
    return EXIT_OK


def handle_list(args: argparse.Namespace, manager: NodeManager) -> int:
    """
    处理 list 命令：列出已安装的 Node 版本。

    参数:
        args: 解析后的命令行参数
        manager: Node 版本管理器

    返回:
        退出码
    """
    scan = manager.scan_installed_versions()
    if not scan.ok:
        print(f"扫描安装目录失败: {scan.error}")
        return EXIT_FAILURE

    versions = scan.versions
    install_dir = manager.config.install_dir

    if args.format == "json":
        result = {
            "install_dir": install_dir,
            "versions": [v.to_dict() for v in versions],
        }
        print(json.dumps(result, indent=2))
        return EXIT_OK

    if not versions:
        print("未找到已安装的 Node 版本")
        print(f"安装目录: {install_dir}")
        return EXIT_OK

    if args.group:
        for group in version_utils.group_versions_by_major(versions):
            print(f"Node {group['major_version']}.x:")
            for v in group["versions"]:
                marker = " *" if v.current else "  "
                print(f"  {marker} {v.version}")
    else:
        print("已安装 Node 版本:")
        for v in versions:
            marker = " *" if v.current else "  "
            print(f"{marker} {v.version}")
            if args.verbose:
                print(f"     路径: {v.path}")
    return EXIT_OK


def handle_parse(args: argparse.Namespace, manager: NodeManager) -> int:
    parsed = manager.parse_version(args.version)
    if parsed is None:
        print(f"不是有效的版本: {args.version}")
        return EXIT_FAILURE
    print(json.dumps(parsed.to_dict(), indent=2))
    return EXIT_OK


def handle_compare(args: argparse.Namespace, manager: NodeManager) -> int:
    print(manager.compare_versions(args.v1, args.v2))
    return EXIT_OK


def handle_satisfies(args: argparse.Namespace, manager: NodeManager) -> int:
    result = manager.satisfies_version(args.version, args.range)
    print("true" if result else "false")
    return EXIT_OK if result else EXIT_FAILURE


def handle_installed(args: argparse.Namespace, manager: NodeManager) -> int:
    InputValidator.validate_version_string(args.version)
    if manager.is_version_installed(args.version):
        print(f"{args.version} 已安装")
        return EXIT_OK
    print(f"{args.version} 未安装")
    return EXIT_FAILURE


def handle_path(args: argparse.Namespace, manager: NodeManager) -> int:
    InputValidator.validate_version_string(args.version)
    print(manager.get_version_path(args.version))
    return EXIT_OK


def handle_validate(args: argparse.Namespace, manager: NodeManager) -> int:
    """
    处理 validate 命令：验证 Node 安装目录是否可用。

    参数:
        args: 解析后的命令行参数
        manager: Node 版本管理器

    返回:
        退出码
    """
    InputValidator.validate_path(args.path)
    if manager.validate_installation(args.path):
        print(f"有效的 Node 安装: {args.path}")
        return EXIT_OK
    print(f"无效的 Node 安装: {args.path}")
    return EXIT_FAILURE


def handle_recommended(args: argparse.Namespace, manager: NodeManager) -> int:
    print(get_recommended_node_version())
    return EXIT_OK
