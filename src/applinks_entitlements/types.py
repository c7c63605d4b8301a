"""
hook 与 CLI 共享的轻量类型定义。
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Host:
    """描述 `config.xml` 中 `<universal-links>` 下的一个 `<host>` 条目。"""

    # 只有 `name` 会写入签名权限（`applinks:<name>`）。
    name: str
    scheme: str = "http"
    event: str | None = None
    paths: tuple[str, ...] = ("*",)


@dataclass(frozen=True)
class PluginPreferences:
    """已解析的插件偏好设置。"""

    hosts: tuple[Host, ...] = ()
