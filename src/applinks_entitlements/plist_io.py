"""
签名权限 plist 的读写工具。

设计原则：
- 文件不存在视为空文档，不算错误。
- 内容损坏时默认告警并回退为空文档；`strict` 模式下直接报错。
- 写入统一使用 XML 格式（UTF-8），并按需创建父目录。
"""

from __future__ import annotations

import os
import plistlib
from typing import Any
from xml.parsers.expat import ExpatError

from .console import warn


def _invalid(path: str, detail: str, *, strict: bool) -> dict[str, Any]:
    """按 `strict` 决定报错还是告警回退。"""
    if strict:
        raise SystemExit(f"Error: invalid entitlements plist {path}: {detail}")
    warn(f"ignoring unreadable entitlements plist {path} ({detail}); it will be overwritten")
    return {}


def load_entitlements(path: str, *, strict: bool = False) -> dict[str, Any]:
    """读取已有签名权限文件（自动识别 XML/Binary），不存在时返回空字典。"""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except FileNotFoundError:
        return {}
    except OSError as e:
        return _invalid(path, str(e), strict=strict)

    if not data.strip():
        return {}

    try:
        obj = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError, AttributeError) as e:
        # 非法 <date> 等值会让 plistlib 抛出 AttributeError。
        return _invalid(path, str(e), strict=strict)

    if not isinstance(obj, dict):
        return _invalid(path, f"top-level value is {type(obj).__name__}, expected dict", strict=strict)
    return obj


def dumps_plist_xml(obj: Any) -> bytes:
    """序列化为 XML plist（UTF-8），保持键的插入顺序。"""
    return plistlib.dumps(obj, fmt=plistlib.FMT_XML, sort_keys=False)


def save_plist_xml(path: str, obj: Any) -> None:
    """将对象以 XML plist 格式写回磁盘，必要时递归创建父目录。"""
    data = dumps_plist_xml(obj)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
