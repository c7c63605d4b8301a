"""
`applinks-entitlements` 的命令行入口模块。

解析工程路径与 `config.xml`，调用 `EntitlementsGenerator` 生成 Debug/Release 签名权限文件。
"""

import argparse
import os
from collections.abc import Sequence

from .config_xml import config_xml_path, read_plugin_preferences, read_project_name
from .console import log_step as _log_step
from .entitlements import ASSOCIATED_DOMAINS, EntitlementsGenerator, build_associated_domains
from .plist_io import dumps_plist_xml

PROJECT_ROOT_ENV = "CORDOVA_PROJECT_ROOT"


def _abs(p: str) -> str:
    """将输入路径展开为绝对路径。"""
    return os.path.abspath(os.path.expanduser(p))


def build_parser() -> argparse.ArgumentParser:
    """构建并返回 `applinks-entitlements` 命令行参数解析器。"""
    p = argparse.ArgumentParser(
        prog="applinks-entitlements",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "Generate iOS Entitlements-Debug.plist / Entitlements-Release.plist with\n"
            f"{ASSOCIATED_DOMAINS} built from <universal-links> hosts in config.xml.\n"
            "Other keys already present in those files are preserved."
        ),
    )
    p.add_argument(
        "-r",
        "--project-root",
        default="",
        help=f"Cordova project root (default: ${PROJECT_ROOT_ENV} or current directory)",
    )
    p.add_argument(
        "-c",
        "--config",
        default="",
        help="Path to config.xml (default: <project-root>/config.xml)",
    )
    p.add_argument(
        "-n",
        "--project-name",
        default="",
        help="Project name under platforms/ios (default: <name> from config.xml)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unreadable existing entitlements instead of overwriting them",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print target files and domains without writing anything",
    )
    p.add_argument("--verbose", action="store_true", help="Verbose logging")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 入口：解析参数、读取配置并生成签名权限文件。"""
    parser = build_parser()
    ns = parser.parse_args(argv)

    project_root = _abs(ns.project_root or os.environ.get(PROJECT_ROOT_ENV) or os.getcwd())
    if not os.path.isdir(project_root):
        raise SystemExit(f"Error: project root not found: {project_root}")
    _log_step(f"Project root: {project_root}")

    config_path = _abs(ns.config) if ns.config else config_xml_path(project_root)
    _log_step(f"Reading {config_path}")
    preferences = read_plugin_preferences(config_path)

    project_name = (ns.project_name or "").strip() or read_project_name(config_path)
    _log_step(f"Project name: {project_name}")

    domains = build_associated_domains(preferences.hosts)
    if not domains:
        _log_step("No <universal-links> hosts found; associated domains will be empty")
    for entry in domains:
        _log_step(f"  {entry}")

    generator = EntitlementsGenerator(
        project_root,
        project_name,
        strict=bool(ns.strict),
        verbose=bool(ns.verbose),
    )

    if ns.dry_run:
        _log_step("Dry-run mode enabled (no file modifications)")
        for path, document in generator.render(preferences.hosts).items():
            _log_step(f"Would write {path}")
            if ns.verbose:
                print(dumps_plist_xml(document).decode("utf-8"))
        return 0

    generator.generate(preferences.hosts)
    for path in generator.paths:
        _log_step(f"Updated {path}")
    return 0
