from __future__ import annotations

"""
关联域（associated domains）签名权限生成模块。

根据主机列表生成 `applinks:<host>` 列表，合并进 Debug/Release 两份签名权限文件。
"""

import os
from collections.abc import Mapping, Sequence
from typing import Any

from .config_xml import config_xml_path, read_project_name
from .console import log_step
from .plist_io import load_entitlements, save_plist_xml
from .types import Host, PluginPreferences

ASSOCIATED_DOMAINS = "com.apple.developer.associated-domains"

HostLike = Host | Mapping[str, Any]


def _host_name(host: HostLike) -> str:
    """兼容 `Host` 对象与含 `name` 键的字典两种主机记录。"""
    if isinstance(host, Mapping):
        value = host.get("name")
    else:
        value = getattr(host, "name", None)
    if not isinstance(value, str) or not value.strip():
        raise SystemExit(f"Error: host entry has no name: {host!r}")
    return value


def domain_entry_for_host(host: HostLike) -> str:
    """生成单个主机对应的关联域记录。"""
    return f"applinks:{_host_name(host)}"


def build_associated_domains(hosts: Sequence[HostLike]) -> list[str]:
    """按首次出现顺序生成去重后的关联域列表。"""
    out: list[str] = []
    seen: set[str] = set()
    for host in hosts:
        entry = domain_entry_for_host(host)
        if entry not in seen:
            seen.add(entry)
            out.append(entry)
    return out


def merge_associated_domains(document: Mapping[str, Any], domains: Sequence[str]) -> dict[str, Any]:
    """返回写入关联域后的新文档；整体替换该键，其余键原样保留。"""
    out = dict(document)
    out[ASSOCIATED_DOMAINS] = list(domains)
    return out


class EntitlementsGenerator:
    """为一个工程生成 Debug/Release 签名权限文件。"""

    def __init__(
        self,
        project_root: str,
        project_name: str,
        *,
        strict: bool = False,
        verbose: bool = False,
    ) -> None:
        ios_dir = os.path.join(project_root, "platforms", "ios", project_name)
        self.project_root = project_root
        self.project_name = project_name
        self.debug_path = os.path.join(ios_dir, "Entitlements-Debug.plist")
        self.release_path = os.path.join(ios_dir, "Entitlements-Release.plist")
        self.strict = strict
        self.verbose = verbose

    @property
    def paths(self) -> tuple[str, str]:
        return self.debug_path, self.release_path

    def render(self, hosts: Sequence[HostLike]) -> dict[str, dict[str, Any]]:
        """读取现有文件并合并关联域，返回 `{path: document}`，不写盘。"""
        domains = build_associated_domains(hosts)
        out: dict[str, dict[str, Any]] = {}
        for path in self.paths:
            current = load_entitlements(path, strict=self.strict)
            out[path] = merge_associated_domains(current, domains)
        return out

    def generate(self, hosts: Sequence[HostLike]) -> None:
        """生成并写回两份签名权限文件；文件系统错误直接向上抛出。"""
        for path, document in self.render(hosts).items():
            save_plist_xml(path, document)
            if self.verbose:
                log_step(f"Wrote {path}")


def generate_associated_domains_entitlements(
    context: Any,
    preferences: PluginPreferences,
    *,
    strict: bool = False,
    verbose: bool = False,
) -> None:
    """hook 入口：从 `context.opts.projectRoot` 与 `config.xml` 推导路径后生成文件。"""
    project_root = context.opts.projectRoot
    project_name = read_project_name(config_xml_path(project_root))
    if verbose:
        log_step(f"Project: {project_name} ({project_root})")
    EntitlementsGenerator(
        project_root,
        project_name,
        strict=strict,
        verbose=verbose,
    ).generate(preferences.hosts)
