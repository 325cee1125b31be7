"""
Static tables: bosses, weapon catalogs and the campaign order.

Files under game-data/ are parsed into pydantic records first, so a typo in
the JSON fails at load time with a field path instead of mid-fight. Runtime
objects (Boss, Weapon) are built fresh on every call; callers mutate them.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from tarnished.engine.attack import AttackSpec, BossPhase, Combo
from tarnished.engine.boss import Boss, BossDialogue
from tarnished.engine.rules import GAME_DATA_DIR
from tarnished.engine.weapon import Weapon


class AttackRecord(BaseModel):
    text: str
    charge: int = Field(ge=0)
    cooldown: int = Field(ge=0)
    dodge: Tuple[int, int]
    damage: int = Field(ge=0)

    def build(self) -> AttackSpec:
        return AttackSpec(self.text, self.charge, self.cooldown, self.dodge, self.damage)


class DialogueRecord(BaseModel):
    win: str = ""
    phase_change: str = ""
    death: str = ""


class BossRecord(BaseModel):
    id: str
    name: str
    hp: int = Field(gt=0)
    reward: int = Field(default=0, ge=0)
    dialogue: DialogueRecord = Field(default_factory=DialogueRecord)
    phases: Dict[str, List[List[AttackRecord]]]

    @field_validator("phases")
    @classmethod
    def _two_phases(cls, v):
        for key in ("1", "2"):
            if not v.get(key):
                raise ValueError(f"phase {key} needs at least one combo")
            if any(not combo for combo in v[key]):
                raise ValueError(f"phase {key} has an empty combo")
        return v

    def _phase(self, key: str) -> BossPhase:
        return BossPhase(tuple(Combo(tuple(a.build() for a in combo)) for combo in self.phases[key]))

    def build(self) -> Boss:
        return Boss(
            name=self.name,
            max_hp=self.hp,
            phase_one=self._phase("1"),
            phase_two=self._phase("2"),
            dialogue=BossDialogue(**self.dialogue.model_dump()),
            reward=self.reward,
            id=self.id,
        )


class AttackLabels(BaseModel):
    light: str
    heavy: str
    special: str


class WeaponRecord(BaseModel):
    name: str
    description: str = ""
    attacks: AttackLabels
    scaling: List[float] = Field(min_length=5, max_length=5)
    price: int = Field(default=0, ge=0)
    damage: int = Field(ge=0)
    time: int = Field(ge=0)

    def build(self) -> Weapon:
        return Weapon(
            name=self.name,
            attacks=self.attacks.model_dump(),
            scaling=list(self.scaling),
            damage=self.damage,
            time=self.time,
            price=self.price,
            description=self.description,
        )


class WeaponTable(BaseModel):
    default: WeaponRecord
    catalogs: Dict[str, List[WeaponRecord]]


class BossTable(BaseModel):
    bosses: List[BossRecord]


class CampaignChapter(BaseModel):
    boss: str
    catalog: str
    opening: Literal["character_creation", "grace", "none"] = "grace"


class Campaign(BaseModel):
    chapters: List[CampaignChapter] = Field(min_length=1)


def _read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


@lru_cache(maxsize=None)
def load_bosses(path: Optional[Path] = None) -> Dict[str, BossRecord]:
    table = BossTable.model_validate(_read_json(path or GAME_DATA_DIR / "bosses.json"))
    return {b.id: b for b in table.bosses}


@lru_cache(maxsize=None)
def load_weapons(path: Optional[Path] = None) -> WeaponTable:
    return WeaponTable.model_validate(_read_json(path or GAME_DATA_DIR / "weapons.json"))


def load_campaign(path: Optional[Path] = None) -> Campaign:
    campaign = Campaign.model_validate(_read_json(path or GAME_DATA_DIR / "campaign.json"))
    bosses = load_bosses()
    catalogs = load_weapons().catalogs
    for chapter in campaign.chapters:
        if chapter.boss not in bosses:
            raise KeyError(f"Campaign names unknown boss: {chapter.boss}")
        if chapter.catalog not in catalogs:
            raise KeyError(f"Campaign names unknown weapon catalog: {chapter.catalog}")
    return campaign


def boss_ids() -> List[str]:
    return list(load_bosses().keys())


def build_boss(boss_id: str) -> Boss:
    bosses = load_bosses()
    if boss_id not in bosses:
        raise KeyError(f"Unknown boss: {boss_id} (known: {', '.join(bosses)})")
    return bosses[boss_id].build()


def build_catalog(catalog_id: str) -> List[Weapon]:
    catalogs = load_weapons().catalogs
    if catalog_id not in catalogs:
        raise KeyError(f"Unknown weapon catalog: {catalog_id}")
    return [w.build() for w in catalogs[catalog_id]]


def default_weapon() -> Weapon:
    return load_weapons().default.build()
