from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .dice import (
    TRIGGER_DISABLED, RerollPolicy, chance_at_least_d6, reroll_ceiling, shift_threshold,
)
from .errors import InvalidArgumentError, UnknownPolicyError

logger = logging.getLogger(__name__)

# Defender toughness values every wound/damage result is aligned to
TOUGHNESS_SWEEP: Tuple[int, ...] = (3, 4, 5, 6, 7, 8)

Sweep = Tuple[float, ...]

class AutoWoundPolicy(str, Enum):
    """When `auto_wound_on` replaces the strength vs toughness roll."""
    NONE = "none"
    ALWAYS = "always"
    TOUGHNESS_EXCEEDS_STRENGTH = "toughness_exceeds_strength"

def required_roll_for(strength: int, toughness: int) -> int:
    ratio = strength / toughness
    if ratio >= 2:
        return 2
    if ratio > 1:
        return 3
    if ratio == 1:
        return 4
    if ratio > 0.5:
        return 5
    return 6

# ---------- Wound stage ----------

@dataclass(frozen=True)
class WoundProfile:
    """
    Expected wounds from a number of hits, swept over TOUGHNESS_SWEEP.

    A wound trigger can add mortal wounds, or divert wounds into a "special"
    bucket saved with `armor_penetration_on_trigger` and dealing
    `alternate_damage_on_trigger` (see DamageProfile).
    """
    hits: float
    strength: int
    reroll: RerollPolicy = RerollPolicy.NONE
    wound_modifier: int = 0

    auto_wound: AutoWoundPolicy = AutoWoundPolicy.NONE
    auto_wound_on: int = 0

    # Triggers (threshold 0 = disabled)
    trigger_threshold: int = TRIGGER_DISABLED
    extra_mortals_on_trigger: float = 0
    armor_penetration_on_trigger: int = 0
    alternate_damage_on_trigger: float = 0

    def __post_init__(self):
        if self.strength < 1:
            raise InvalidArgumentError(f"strength must be >= 1, got {self.strength}")
        for name in ("hits", "auto_wound_on", "trigger_threshold",
                     "extra_mortals_on_trigger", "alternate_damage_on_trigger"):
            if getattr(self, name) < 0:
                raise InvalidArgumentError(f"{name} must be >= 0, got {getattr(self, name)}")
        # Unknown policies are left for dispatch to reject
        overriding = (AutoWoundPolicy.ALWAYS, AutoWoundPolicy.TOUGHNESS_EXCEEDS_STRENGTH)
        if self.auto_wound in overriding and self.auto_wound_on < 1:
            raise InvalidArgumentError(
                f"auto_wound_on must be >= 1 with auto_wound={self.auto_wound!r}, got {self.auto_wound_on}")

    def _auto_wounds(self, toughness: int) -> bool:
        if self.auto_wound == AutoWoundPolicy.ALWAYS:
            return True
        if self.auto_wound == AutoWoundPolicy.TOUGHNESS_EXCEEDS_STRENGTH:
            return toughness > self.strength
        if self.auto_wound == AutoWoundPolicy.NONE:
            return False
        logger.debug("Rejecting auto-wound policy %r", self.auto_wound)
        raise UnknownPolicyError(f"Unknown auto-wound policy: {self.auto_wound!r}")

    def unmodified_thresholds(self) -> Tuple[int, ...]:
        return tuple(
            self.auto_wound_on if self._auto_wounds(t) else required_roll_for(self.strength, t)
            for t in TOUGHNESS_SWEEP
        )

    def modified_thresholds(self) -> Tuple[int, ...]:
        """Auto-wound rolls ignore the modifier; the rest never drop below 2+."""
        return tuple(
            self.auto_wound_on if self._auto_wounds(t)
            else max(2, shift_threshold(unmodified, self.wound_modifier))
            for t, unmodified in zip(TOUGHNESS_SWEEP, self.unmodified_thresholds())
        )

    def wound_chances(self) -> Sweep:
        return tuple(chance_at_least_d6(w) for w in self.modified_thresholds())

    def raw_wounds(self) -> Sweep:
        return tuple(chance * self.hits for chance in self.wound_chances())

    def reroll_ceilings(self) -> Tuple[int, ...]:
        return tuple(
            reroll_ceiling(self.reroll, modified, unmodified)
            for modified, unmodified in zip(self.modified_thresholds(), self.unmodified_thresholds())
        )

    def reroll_wounds(self) -> Sweep:
        return tuple((c / 6) * raw for c, raw in zip(self.reroll_ceilings(), self.raw_wounds()))

    def total_wound_rolls(self) -> Sweep:
        return tuple(self.hits * (c / 6 + 1) for c in self.reroll_ceilings())

    # --- Triggers ---
    def modified_trigger_threshold(self) -> int:
        if self.trigger_threshold == TRIGGER_DISABLED:
            return TRIGGER_DISABLED
        return shift_threshold(self.trigger_threshold, self.wound_modifier)

    def total_triggers(self) -> Sweep:
        if self.trigger_threshold == TRIGGER_DISABLED:
            return tuple(0.0 for _ in TOUGHNESS_SWEEP)
        chance = chance_at_least_d6(self.modified_trigger_threshold())
        return tuple(rolls * chance for rolls in self.total_wound_rolls())

    def total_mortal_wounds(self) -> Sweep:
        return tuple(self.extra_mortals_on_trigger * t for t in self.total_triggers())

    def total_special_wounds(self) -> Sweep:
        """
        Wounds diverted into the AP/damage-replacement bucket.
        A trigger at least as hard as the wound roll only fires on wounding
        dice, so the trigger count is used; an easier trigger makes every
        successful wound special.
        """
        configured = self.armor_penetration_on_trigger or self.alternate_damage_on_trigger
        if not configured or self.trigger_threshold == TRIGGER_DISABLED:
            return tuple(0.0 for _ in TOUGHNESS_SWEEP)
        trigger_on = self.modified_trigger_threshold()
        return tuple(
            triggers if trigger_on >= wound_on else raw + reroll
            for wound_on, triggers, raw, reroll in zip(
                self.modified_thresholds(), self.total_triggers(),
                self.raw_wounds(), self.reroll_wounds())
        )

    def total_ordinary_wounds(self) -> Sweep:
        return tuple(
            raw + reroll - special
            for raw, reroll, special in zip(
                self.raw_wounds(), self.reroll_wounds(), self.total_special_wounds())
        )
