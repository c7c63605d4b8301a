"""
Cordova `config.xml` 解析辅助模块。

提供工程名与 `<universal-links>` 主机列表两项读取能力；元素匹配忽略命名空间，
兼容 `http://www.w3.org/ns/widgets` 默认命名空间。
"""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET

from .types import Host, PluginPreferences


def config_xml_path(project_root: str) -> str:
    """返回工程根目录下 `config.xml` 的路径。"""
    return os.path.join(project_root, "config.xml")


def _local(tag: str) -> str:
    """去掉 `{namespace}` 前缀，仅保留本地元素名。"""
    return tag.rsplit("}", 1)[-1]


def _load_root(config_path: str) -> ET.Element:
    if not os.path.isfile(config_path):
        raise SystemExit(f"Error: config.xml not found: {config_path}")
    try:
        return ET.parse(config_path).getroot()
    except ET.ParseError as e:
        raise SystemExit(f"Error: failed to parse {config_path}: {e}") from e


def read_project_name(config_path: str) -> str:
    """读取顶层 `<name>` 元素作为工程名。"""
    root = _load_root(config_path)
    for child in root:
        if _local(child.tag) == "name":
            name = (child.text or "").strip()
            if name:
                return name
            break
    raise SystemExit(f"Error: missing <name> in {config_path}")


def _parse_host(elem: ET.Element, config_path: str) -> Host:
    name = (elem.get("name") or "").strip()
    if not name:
        raise SystemExit(f"Error: <host> without name attribute in {config_path}")

    paths: list[str] = []
    for child in elem:
        if _local(child.tag) != "path":
            continue
        url = (child.get("url") or "").strip()
        if url:
            paths.append(url)

    return Host(
        name=name,
        scheme=(elem.get("scheme") or "http").strip(),
        event=elem.get("event") or None,
        paths=tuple(paths) if paths else ("*",),
    )


def read_plugin_preferences(config_path: str) -> PluginPreferences:
    """读取 `<universal-links>` 下全部 `<host>`，保持文件中的出现顺序。"""
    root = _load_root(config_path)
    hosts: list[Host] = []
    for section in root.iter():
        if _local(section.tag) != "universal-links":
            continue
        for elem in section:
            if _local(elem.tag) == "host":
                hosts.append(_parse_host(elem, config_path))
    return PluginPreferences(hosts=tuple(hosts))
