from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration dictionaries coming from the persisted file or
the command line: coerces types, checks enumerated values and fills
missing keys with defaults. Problems become warnings, or exceptions in
strict mode.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from astviz.core.analysis.classifier import ExpansionPolicy
from astviz.domain.config import get_default_config
from astviz.domain.constants import STATS_STYLES
from astviz.infra.logging import LEVEL_NAMES

logger = logging.getLogger(__name__)

POLICY_NAMES = tuple(p.value for p in ExpansionPolicy)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on a value outside its allowed set.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in ("color", "show_stats", "with_meta"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_file"] = _as_str(merged.get("log_file"), defaults["log_file"], "log_file", warnings, strict)

    choices = {
        "expansion_policy": POLICY_NAMES,
        "stats_style": STATS_STYLES,
        "log_level": LEVEL_NAMES,
    }
    for field, allowed in choices.items():
        merged[field] = _as_choice(merged.get(field), defaults[field], allowed, field, warnings, strict)

    return merged, warnings


def policy_from_config(config: Dict[str, Any]) -> ExpansionPolicy:
    """Expansion policy selected by a validated configuration."""
    return ExpansionPolicy(config["expansion_policy"])


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce booleans, accepting 0/1 and yes/no words outside strict mode."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_choice(
        value: Any,
        fallback: str,
        allowed: Sequence[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Case-insensitive match of a string against its allowed values."""
    if value is None:
        return fallback
    if not isinstance(value, str):
        msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    for option in allowed:
        if value.strip().lower() == option.lower():
            return option

    msg = f"Invalid value '{value}' for '{field}': expected one of {', '.join(allowed)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
