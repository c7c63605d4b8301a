"""
`python -m applinks_entitlements` entrypoint.

This is mainly for convenience; the installed console script `applinks-entitlements`
calls the same `applinks_entitlements.cli:main`.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
