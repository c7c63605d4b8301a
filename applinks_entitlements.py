#!/usr/bin/env python3
"""
Source-checkout entrypoint.

Lets a Cordova hook (or a developer) run the generator without installing it:
  python3 applinks_entitlements.py --project-root /path/to/app
"""

import os
import sys

# Running from a source checkout: put `src/` on sys.path.
_HERE = os.path.dirname(os.path.abspath(__file__))
_SRC = os.path.join(_HERE, "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

# Behave like a package shim when imported as `applinks_entitlements`, so this
# file does not shadow `src/applinks_entitlements/`.
__path__ = [os.path.join(_SRC, "applinks_entitlements")]


def main(argv: list[str] | None = None) -> int:
    from applinks_entitlements.cli import main as _main

    return _main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
