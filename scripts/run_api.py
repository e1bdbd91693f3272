#!/usr/bin/env python3
"""Run FastAPI rate feed service."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import uvicorn

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from ratefeed.config import load_settings


def main() -> int:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger(__name__).info(
        "Rate feed listening on http://%s:%s", settings.api_host, settings.api_port
    )
    uvicorn.run(
        "ratefeed.service:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
