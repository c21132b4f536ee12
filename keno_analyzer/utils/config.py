"""
keno_analyzer/utils/config.py
Load env vars and game parameter JSON files.
"""
import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = Path(os.getenv("KENO_CONFIG_DIR", str(ROOT / "config")))

# ── Games ─────────────────────────────────────────────────────────
GAME_CONFIG_FILES: dict[str, str] = {
    "keno_80": "keno_params.json",
}

GAME_LABELS: dict[str, str] = {
    "keno_80": "Keno 20/80",
}

DEFAULT_GAME: str = os.getenv("KENO_GAME", "keno_80")

AVERAGE_POLICIES = ("window", "parsed")

_game_config_cache: dict[str, Any] = {}


def get_game_config(game: str = DEFAULT_GAME) -> dict[str, Any]:
    """Load and cache the parameter JSON for a game."""
    if game in _game_config_cache:
        return _game_config_cache[game]
    filename = GAME_CONFIG_FILES.get(game)
    if not filename:
        raise ValueError(f"Unknown game: {game}")
    path = CONFIG_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)
    _game_config_cache[game] = config
    return config


def get_number_range(game: str = DEFAULT_GAME) -> tuple[int, int]:
    cfg = get_game_config(game)
    lo, hi = cfg["number_range"]
    return lo, hi


def get_draw_size(game: str = DEFAULT_GAME) -> int:
    """Return how many winning numbers make one draw (20 for keno)."""
    return get_game_config(game).get("draw_size", 20)


def get_windows(game: str = DEFAULT_GAME) -> list[tuple[str, int | None]]:
    """Return (label, size) pairs in display order. size None = every record."""
    cfg = get_game_config(game)
    return [(w["label"], w.get("size")) for w in cfg.get("windows", [])]


def get_hot_count(game: str = DEFAULT_GAME) -> int:
    return get_game_config(game).get("hot_count", 10)


def get_cold_count(game: str = DEFAULT_GAME) -> int:
    return get_game_config(game).get("cold_count", 10)


def get_least_frequent_count(game: str = DEFAULT_GAME) -> int:
    return get_game_config(game).get("least_frequent_count", 4)


def get_average_policy(game: str = DEFAULT_GAME) -> str:
    """Return 'window' (divide by window size) or 'parsed' (divide by parseable values)."""
    policy = get_game_config(game).get("average_policy", "window")
    if policy not in AVERAGE_POLICIES:
        raise ValueError(f"Unknown average policy: {policy}")
    return policy


def get_record_parser_options(game: str = DEFAULT_GAME) -> dict[str, Any]:
    return dict(get_game_config(game).get("record_parser", {}))


def get_stream_extractor_options(game: str = DEFAULT_GAME) -> dict[str, Any]:
    return dict(get_game_config(game).get("stream_extractor", {}))
