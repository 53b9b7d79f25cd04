from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Optional

from .dice import (
    TRIGGER_DISABLED, RerollPolicy, chance_at_least_d6, reroll_ceiling, shift_threshold,
)
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

AUTO_SUCCESS = 1  # required roll for weapons that always hit; cannot be modified

# ---------- Hit stage ----------

@dataclass(frozen=True)
class HitProfile:
    """Expected hits from a number of attacks, with re-rolls and on-hit triggers."""
    attacks: float
    required_roll: int
    reroll: RerollPolicy = RerollPolicy.NONE
    hit_modifier: int = 0

    # Triggers (threshold 0 = disabled)
    trigger_threshold: int = TRIGGER_DISABLED
    bonus_attacks_on_trigger: float = 0
    bonus_hits_on_trigger: float = 0
    mortal_wounds_instead_on_trigger: float = 0  # non-zero converts the hit; value is mortals per trigger

    def __post_init__(self):
        if self.required_roll < 1:
            raise InvalidArgumentError(f"required_roll must be >= 1, got {self.required_roll}")
        for name in ("attacks", "trigger_threshold", "bonus_attacks_on_trigger",
                     "bonus_hits_on_trigger", "mortal_wounds_instead_on_trigger"):
            if getattr(self, name) < 0:
                raise InvalidArgumentError(f"{name} must be >= 0, got {getattr(self, name)}")

    def modified_required_roll(self) -> int:
        """Auto-hits are unmodifiable; anything else never drops below 2+."""
        if self.required_roll == AUTO_SUCCESS:
            return AUTO_SUCCESS
        return max(2, shift_threshold(self.required_roll, self.hit_modifier))

    def raw_hits(self) -> float:
        return self.attacks * chance_at_least_d6(self.modified_required_roll())

    def reroll_ceiling(self) -> int:
        if self.required_roll == AUTO_SUCCESS:
            return 0
        return reroll_ceiling(self.reroll, self.modified_required_roll(), self.required_roll)

    def reroll_hits(self) -> float:
        return (self.reroll_ceiling() / 6) * self.raw_hits()

    def total_attacks_with_rerolls(self) -> float:
        """Initial attack dice plus the dice picked up again by re-rolls."""
        return self.attacks * (self.reroll_ceiling() / 6 + 1)

    # --- Triggers ---
    def modified_trigger_threshold(self) -> int:
        if self.trigger_threshold == TRIGGER_DISABLED:
            return TRIGGER_DISABLED
        return shift_threshold(self.trigger_threshold, self.hit_modifier)

    def total_triggers(self) -> float:
        if self.trigger_threshold == TRIGGER_DISABLED:
            return 0.0
        return self.total_attacks_with_rerolls() * chance_at_least_d6(self.modified_trigger_threshold())

    def bonus_hits(self) -> float:
        return self.bonus_hits_on_trigger * self.total_triggers()

    def bonus_attack_profile(self) -> Optional[HitProfile]:
        """
        Profile for the attacks granted by the trigger, or None without any.
        Bonus attacks keep the parent's bonus hits but cannot grant further
        attacks or mortal wounds, so the nesting is exactly one level deep.
        """
        if not self.bonus_attacks_on_trigger:
            return None
        return replace(
            self,
            attacks=self.bonus_attacks_on_trigger * self.total_triggers(),
            bonus_attacks_on_trigger=0,
            mortal_wounds_instead_on_trigger=0,
        )

    def bonus_attack_hits(self) -> float:
        bonus = self.bonus_attack_profile()
        if bonus is None:
            return 0.0
        logger.debug("Resolving %.3f bonus attacks", bonus.attacks)
        return bonus.total_hits()

    def mortal_wound_trigger_count(self) -> float:
        """Triggers spent on mortal wounds; each removes one ordinary hit."""
        return self.total_triggers() if self.mortal_wounds_instead_on_trigger else 0.0

    def total_mortal_wounds(self) -> float:
        return self.mortal_wounds_instead_on_trigger * self.mortal_wound_trigger_count()

    def total_hits(self) -> float:
        return max(0.0, self.raw_hits()
                   + self.reroll_hits()
                   + self.bonus_hits()
                   + self.bonus_attack_hits()
                   - self.mortal_wound_trigger_count())
