from __future__ import annotations

import json
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)

GAME_DATA_DIR = Path(__file__).resolve().parents[1] / "game-data"
RULES_ENV_VAR = "TARNISHED_RULES"

# Fallbacks when game-data/rules.json is missing a key.
DEFAULT_RULES: Dict[str, Any] = {
    "dodge_window": 2,
    "failed_dodge_ticks": 2,
    "wasted_turn_ticks": 2,
    "min_wait_ticks": 1,
    "heal_amount": 50,
    "heal_ticks": 2,
    "special_fp_cost": 50,
    "damage_stat_factor": 20,
    "attack_multipliers": {"light": 1, "heavy": 2, "special": 2},
    "attack_time_multipliers": {"light": 1, "heavy": 2, "special": 1},
    "stamina_time_divisor": 10,
    "stat_cap": 99,
    "hp_per_vigor": 30,
    "fp_per_mind": 30,
    "victory_heal_charges": 1,
}


def deep_merge(base, overlay):
    """Recursively merge overlay into a deepcopy of base (lists are replaced)."""
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = deepcopy(base)
        for key, val in overlay.items():
            merged[key] = deep_merge(merged[key], val) if key in merged else deepcopy(val)
        return merged
    return deepcopy(overlay)


def _read_json(path: Path) -> Dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Rules file must hold a JSON object: {path}")
    return data


def load_rules(override_path: Optional[str | Path] = None) -> Dict[str, Any]:
    """
    Build the combat rules table.

    Order (later wins):
      - DEFAULT_RULES
      - game-data/rules.json
      - override file from `override_path`, else from $TARNISHED_RULES
    """
    rules = deepcopy(DEFAULT_RULES)
    shipped = GAME_DATA_DIR / "rules.json"
    if shipped.exists():
        rules = deep_merge(rules, _read_json(shipped))

    override = override_path or os.environ.get(RULES_ENV_VAR)
    if override:
        path = Path(override)
        logger.info("Loading rules override from %s", path)
        rules = deep_merge(rules, _read_json(path))
    return rules


def rule(rules: Optional[Dict[str, Any]], key: str) -> Any:
    if rules and key in rules:
        return rules[key]
    return DEFAULT_RULES[key]
