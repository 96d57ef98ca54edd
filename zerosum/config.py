# zerosum/config.py
from dataclasses import dataclass, field
from typing import Dict
import logging
import os
import tomllib

logger = logging.getLogger(__name__)

# Defaults (pawn units)
PIECE_VALUES = {
    "PAWN": 1.0,
    "KNIGHT": 3.0,
    "BISHOP": 3.0,
    "ROOK": 5.0,
    "QUEEN": 9.0,
    "KING": 0.0,
}

CACHE_POLICIES = ("deeper", "shallower")

# Hard limits on caller-supplied arguments. The search recurses once per ply.
MAX_SEARCH_DEPTH = 64
MAX_LINE_LENGTH = 256


@dataclass
class SearchConfig:
    depth: int = 4
    line_length: int = 4
    # "deeper": reuse an entry only if it was searched at least as deep as the query.
    # "shallower": reuse an entry if the query is at least as deep as the stored search.
    cache_policy: str = "deeper"


@dataclass
class EvalConfig:
    piece_values: Dict[str, float] = field(default_factory=lambda: PIECE_VALUES.copy())


@dataclass
class NimConfig:
    items: int = 4
    max_take: int = 2
    misere: bool = False


@dataclass
class UIConfig:
    engine_name: str = "ZeroSum"
    # deepest chess search the HTTP API accepts
    api_max_chess_depth: int = 6


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    nim: NimConfig = field(default_factory=NimConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "zerosum.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "nim", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
                else:
                    logger.debug("ignoring unknown key %s.%s in %s", section, k, path)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg

    def apply_env(self, environ=None) -> "Config":
        """Apply ZEROSUM_* environment overrides in place."""
        environ = os.environ if environ is None else environ
        depth = environ.get("ZEROSUM_SEARCH_DEPTH")
        if depth:
            try:
                self.search.depth = int(depth)
            except ValueError:
                logger.warning("ignoring ZEROSUM_SEARCH_DEPTH=%r: not an integer", depth)
        policy = environ.get("ZEROSUM_CACHE_POLICY")
        if policy:
            if policy in CACHE_POLICIES:
                self.search.cache_policy = policy
            else:
                logger.warning("ignoring ZEROSUM_CACHE_POLICY=%r: expected one of %s",
                               policy, ", ".join(CACHE_POLICIES))
        return self


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("ZEROSUM_CONFIG_TOML", "zerosum.toml")).apply_env()
