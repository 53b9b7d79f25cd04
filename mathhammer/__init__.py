"""Expected hits, wounds and damage for d6 wargame attacks."""

from .damage import DamageProfile
from .dice import (
    TRIGGER_DISABLED,
    RerollPolicy,
    chance_at_least,
    chance_at_least_d6,
    expected_from_dice,
    shift_threshold,
)
from .errors import InvalidArgumentError, MathhammerError, UnknownPolicyError
from .hits import AUTO_SUCCESS, HitProfile
from .profile import WeaponProfile, expected_damage_total
from .wounds import TOUGHNESS_SWEEP, AutoWoundPolicy, WoundProfile, required_roll_for

__all__ = [
    "AUTO_SUCCESS",
    "TOUGHNESS_SWEEP",
    "TRIGGER_DISABLED",
    "AutoWoundPolicy",
    "DamageProfile",
    "HitProfile",
    "InvalidArgumentError",
    "MathhammerError",
    "RerollPolicy",
    "UnknownPolicyError",
    "WeaponProfile",
    "WoundProfile",
    "chance_at_least",
    "chance_at_least_d6",
    "expected_damage_total",
    "expected_from_dice",
    "required_roll_for",
    "shift_threshold",
]
