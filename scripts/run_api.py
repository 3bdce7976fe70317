#!/usr/bin/env python3
"""Start the office agenda API (uvicorn)."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for p in (PROJECT_ROOT / "src", PROJECT_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


def main() -> int:
    from apps.api_gateway.main import run

    run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
