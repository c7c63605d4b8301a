"""
统一的控制台输出：流程提示走 stdout，告警走 stderr，均带工具前缀。
"""

import sys

PREFIX = "[applinks-entitlements]"


def log_step(message: str) -> None:
    """输出简洁的流程阶段提示。"""
    print(f"{PREFIX} {message}")


def warn(message: str) -> None:
    print(f"{PREFIX} Warning: {message}", file=sys.stderr)
