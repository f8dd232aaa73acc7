"""Runtime configuration for the Intcode VM.

Settings are read from the environment:
- INTCODE_MAX_STEPS: step budget for every machine (unset = unlimited)
- INTCODE_TRACE: log each executed instruction at debug level
- INTCODE_LOG_LEVEL: level the command line installs its handler at

Values accept booleans, ints or strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
import os

_ENV_PREFIX = "INTCODE_"


@dataclass
class IntcodeConfig:
    max_steps: Optional[int] = None
    trace: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "IntcodeConfig":
        env = os.environ if environ is None else environ
        config = cls()

        max_steps = _parse_value(env.get(_ENV_PREFIX + "MAX_STEPS", ""))
        if isinstance(max_steps, int) and not isinstance(max_steps, bool) and max_steps > 0:
            config.max_steps = max_steps

        trace = _parse_value(env.get(_ENV_PREFIX + "TRACE", ""))
        config.trace = trace is True or trace == 1

        level = env.get(_ENV_PREFIX + "LOG_LEVEL")
        if level:
            config.log_level = level.strip().upper()
        return config


def _parse_value(raw: str) -> Any:
    if not raw:
        return raw
    raw = raw.strip()
    lowered = raw.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    try:
        return int(raw)
    except ValueError:
        pass
    if (raw.startswith("\"") and raw.endswith("\"")) or (raw.startswith("'") and raw.endswith("'")):
        return raw[1:-1]
    return raw


# Global singleton instance
_config: Optional[IntcodeConfig] = None


def get_config() -> IntcodeConfig:
    """Get or load the process wide configuration"""
    global _config
    if _config is None:
        _config = IntcodeConfig.from_env()
    return _config


def reset_config(config: Optional[IntcodeConfig] = None) -> IntcodeConfig:
    """Replace the cached configuration (re-read from the environment if None)"""
    global _config
    _config = config if config is not None else IntcodeConfig.from_env()
    return _config
