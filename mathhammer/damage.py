from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

from .dice import chance_at_least_d6, shift_threshold
from .errors import InvalidArgumentError
from .hits import HitProfile
from .wounds import TOUGHNESS_SWEEP, Sweep, WoundProfile

# ---------- Damage stage ----------

@dataclass(frozen=True)
class DamageProfile:
    """
    Expected damage per toughness after the defender's save.

    Ordinary wounds are saved against `defender_save` worsened by
    `base_armor_penetration`; special wounds use the wound trigger's AP and
    damage instead. Mortal wounds skip the save.
    """
    hit_profile: HitProfile
    wound_profile: WoundProfile
    damage_per_wound: float
    defender_save: int
    base_armor_penetration: int = 0

    def __post_init__(self):
        if self.damage_per_wound < 0:
            raise InvalidArgumentError(f"damage_per_wound must be >= 0, got {self.damage_per_wound}")
        if self.defender_save < 1:
            raise InvalidArgumentError(f"defender_save must be >= 1, got {self.defender_save}")

    def _unsaved_chance(self, armor_penetration: int) -> float:
        return 1 - chance_at_least_d6(shift_threshold(self.defender_save, armor_penetration))

    def mortal_wounds(self) -> Sweep:
        from_hits = self.hit_profile.total_mortal_wounds()
        return tuple(mw + from_hits for mw in self.wound_profile.total_mortal_wounds())

    def unsaved_ordinary_wounds(self) -> Sweep:
        p_unsaved = self._unsaved_chance(self.base_armor_penetration)
        return tuple(w * p_unsaved for w in self.wound_profile.total_ordinary_wounds())

    def unsaved_special_wounds(self) -> Sweep:
        p_unsaved = self._unsaved_chance(self.wound_profile.armor_penetration_on_trigger)
        return tuple(w * p_unsaved for w in self.wound_profile.total_special_wounds())

    def total_damage(self) -> Sweep:
        alternate = self.wound_profile.alternate_damage_on_trigger
        return tuple(
            ordinary * self.damage_per_wound + special * alternate + mortals
            for ordinary, special, mortals in zip(
                self.unsaved_ordinary_wounds(), self.unsaved_special_wounds(), self.mortal_wounds())
        )

    def by_toughness(self) -> Dict[int, float]:
        return dict(zip(TOUGHNESS_SWEEP, self.total_damage()))
