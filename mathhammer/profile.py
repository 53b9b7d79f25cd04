from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .damage import DamageProfile
from .dice import TRIGGER_DISABLED, RerollPolicy, expected_from_dice
from .hits import HitProfile
from .wounds import TOUGHNESS_SWEEP, AutoWoundPolicy, Sweep, WoundProfile

logger = logging.getLogger(__name__)

# ---------- Data model ----------

@dataclass(frozen=True)
class WeaponProfile:
    """One weapon line: attack characteristics, triggers and the target's save."""
    name: str
    attacks: float
    skill: int
    strength: int
    damage: str = "1"
    ap: int = 0

    # Offensive mods
    hit_mod: int = 0
    wound_mod: int = 0
    reroll_hit: RerollPolicy = RerollPolicy.NONE
    reroll_wound: RerollPolicy = RerollPolicy.NONE

    # On-hit trigger
    hit_trigger_on: int = TRIGGER_DISABLED
    bonus_attacks_on_hit_trigger: float = 0
    bonus_hits_on_hit_trigger: float = 0
    mortals_instead_on_hit_trigger: float = 0

    # Auto-wound
    auto_wound: AutoWoundPolicy = AutoWoundPolicy.NONE
    auto_wound_on: int = 0

    # On-wound trigger
    wound_trigger_on: int = TRIGGER_DISABLED
    mortals_on_wound_trigger: float = 0
    ap_on_wound_trigger: int = 0
    damage_on_wound_trigger: Optional[str] = None  # None or blank: same as `damage`

    # Defensive context
    target_save: int = 4

    def hit_profile(self) -> HitProfile:
        return HitProfile(
            attacks=self.attacks,
            required_roll=self.skill,
            reroll=self.reroll_hit,
            hit_modifier=self.hit_mod,
            trigger_threshold=self.hit_trigger_on,
            bonus_attacks_on_trigger=self.bonus_attacks_on_hit_trigger,
            bonus_hits_on_trigger=self.bonus_hits_on_hit_trigger,
            mortal_wounds_instead_on_trigger=self.mortals_instead_on_hit_trigger,
        )

    def wound_profile(self, hits: Optional[float] = None) -> WoundProfile:
        if hits is None:
            hits = self.hit_profile().total_hits()
        return WoundProfile(
            hits=hits,
            strength=self.strength,
            reroll=self.reroll_wound,
            wound_modifier=self.wound_mod,
            auto_wound=self.auto_wound,
            auto_wound_on=self.auto_wound_on,
            trigger_threshold=self.wound_trigger_on,
            extra_mortals_on_trigger=self.mortals_on_wound_trigger,
            armor_penetration_on_trigger=self.ap_on_wound_trigger,
            alternate_damage_on_trigger=expected_from_dice(self.damage_on_wound_trigger or self.damage),
        )

    def damage_profile(self) -> DamageProfile:
        hit_profile = self.hit_profile()
        return DamageProfile(
            hit_profile=hit_profile,
            wound_profile=self.wound_profile(hit_profile.total_hits()),
            damage_per_wound=expected_from_dice(self.damage),
            defender_save=self.target_save,
            base_armor_penetration=self.ap,
        )

    def expected_damage(self) -> Sweep:
        """Expected damage against each toughness in TOUGHNESS_SWEEP."""
        result = self.damage_profile().total_damage()
        logger.debug("%s: %s", self.name, result)
        return result

# ---------- Batch utility ----------

def expected_damage_total(profiles: Iterable[WeaponProfile]) -> Sweep:
    total = [0.0] * len(TOUGHNESS_SWEEP)
    for p in profiles:
        for i, dmg in enumerate(p.expected_damage()):
            total[i] += dmg
    return tuple(total)
