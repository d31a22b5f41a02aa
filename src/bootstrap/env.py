# src/bootstrap/env.py
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"

ENV_KEYS = (
    "COIN_STATS_API_BASE",
    "COIN_STATS_TIMEOUT_SEC",
    "EQUITY_SYMBOLS",
    "EQUITY_EXCHANGE",
    "EQUITY_DB",
    "EQUITY_STARTING_BALANCE",
)

_loaded = False


def load_env() -> bool:
    """Read the project .env once per process. True if a file was loaded."""
    global _loaded
    if _loaded:
        return True
    if not ENV_PATH.exists():
        print(f"[BOOTSTRAP] WARNING: .env not found at {ENV_PATH}", file=sys.stderr)
        return False
    load_dotenv(dotenv_path=ENV_PATH, override=True)
    _loaded = True
    return True


def env_debug() -> Dict[str, Optional[str]]:
    return {k: os.getenv(k) for k in ENV_KEYS}


load_env()
