"""
Shared UI event emitters.
Works for both CLI and event providers by probing for a session.emit hook.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)

_TRACED_EVENTS = {"phase_change", "combat_result", "attack_telegraph"}


def emit_event(ui, payload: Dict[str, Any]) -> None:
    """
    Best-effort emit of structured events for non-blocking UIs.
    Providers without a session (CLI, test doubles) get nothing.
    """
    provider = getattr(ui, "provider", None) or ui
    session = getattr(provider, "session", None)
    t = payload.get("type") if isinstance(payload, dict) else None
    if t in _TRACED_EVENTS:
        logger.debug(
            "emit_event type=%s (has_session=%s, has_emit=%s)",
            t, bool(session), bool(session and hasattr(session, "emit")),
        )
    if not (session and hasattr(session, "emit")):
        return
    try:
        session.emit(payload)
    except Exception:
        # emitting should never break the tick loop
        logger.debug("emit_event failed for %s", t, exc_info=True)


def build_combat_state(active: bool) -> Dict[str, Any]:
    return {"type": "combat_state", "active": active}


def emit_combat_state(ui, active: bool) -> None:
    emit_event(ui, build_combat_state(active))


def emit_combat_log(ui, text: str, log_type: Optional[str] = None) -> None:
    payload = {"type": "combat_log", "text": text}
    if log_type:
        payload["logType"] = log_type
    emit_event(ui, payload)
    ui.narration(text)


def build_player_update(player) -> Dict[str, Any]:
    return {
        "type": "player_update",
        "player": {
            "name": player.name,
            "hp": {"current": player.hp, "max": player.max_hp},
            "fp": {"current": player.fp, "max": player.max_fp},
            "heal_charges": player.heal_charges,
            "runes": player.runes,
            "weapon": player.weapon.name,
        },
    }


def emit_player_update(ui, player) -> None:
    emit_event(ui, build_player_update(player))


def build_boss_update(boss) -> Dict[str, Any]:
    return {
        "type": "boss_update",
        "boss": {
            "id": boss.id,
            "name": boss.name,
            "hp": {"current": boss.current_hp, "max": boss.max_hp},
            "phase": boss.phase,
        },
    }


def emit_boss_update(ui, boss) -> None:
    emit_event(ui, build_boss_update(boss))


def build_attack_telegraph(attack, remaining: int) -> Dict[str, Any]:
    # The dodge window stays hidden; the player reads it from the text.
    return {
        "type": "attack_telegraph",
        "text": attack.text,
        "charge": remaining,
        "damage": attack.damage,
    }


def emit_attack_telegraph(ui, attack, remaining: int) -> None:
    emit_event(ui, build_attack_telegraph(attack, remaining))


def build_phase_change(boss) -> Dict[str, Any]:
    return {"type": "phase_change", "boss": boss.name, "phase": boss.phase}


def emit_phase_change(ui, boss) -> None:
    emit_event(ui, build_phase_change(boss))


def build_combat_result(result) -> Dict[str, Any]:
    return {
        "type": "combat_result",
        "status": result.status.value,
        "player_won": result.player_won,
        "ticks": result.ticks,
    }


def emit_combat_result(ui, result) -> None:
    emit_event(ui, build_combat_result(result))
