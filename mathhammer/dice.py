from __future__ import annotations
import logging
import re
from enum import Enum

from .errors import InvalidArgumentError, UnknownPolicyError

logger = logging.getLogger(__name__)

D6 = 6
TRIGGER_DISABLED = 0    # trigger threshold meaning "no trigger configured"

# ---------- Probability primitives ----------

def chance_at_least(sides: int, min_roll: int) -> float:
    """P(roll >= min_roll) on a die with `sides` faces."""
    if min_roll <= 0:
        raise InvalidArgumentError(f"Minimum roll value must be >= 1, got {min_roll}")
    return max(0.0, (sides - (min_roll - 1)) / sides)

def chance_at_least_d6(min_roll: int) -> float:
    return chance_at_least(D6, min_roll)

def shift_threshold(original: int, modifier: int) -> int:
    """
    Shift a minimum required roll by a modifier.
    This moves the *threshold*, not the die: +1 turns a 4+ into a 3+.
    No upper limit; never below 1.
    """
    return max(1, original - modifier)

# ---------- Re-rolls ----------

class RerollPolicy(str, Enum):
    """Which dice may be re-rolled once."""
    NONE = "none"
    ONES = "ones"
    ALL = "all"

def reroll_ceiling(policy: RerollPolicy, modified: int, unmodified: int) -> int:
    """
    Highest natural face (inclusive) that gets re-rolled.
    ALL stops below the easier of the natural and modified thresholds, so a face
    that already succeeds after a positive modifier is never re-rolled as well.
    """
    if policy == RerollPolicy.ALL:
        return min(modified, unmodified) - 1
    if policy == RerollPolicy.ONES:
        return 1
    if policy == RerollPolicy.NONE:
        return 0
    logger.debug("Rejecting reroll policy %r", policy)
    raise UnknownPolicyError(f"Unknown reroll policy: {policy!r}")

# ---------- Dice expressions ----------

_TERM = r"(?:\d*d[36](?:\*\d+)?|\d+(?:\.\d+)?)"
_EXPRESSION = re.compile(rf"[+\-]?{_TERM}(?:[+\-]{_TERM})*")
_PART = re.compile(r"([+\-]?)(?:(\d*)d([36])(?:\*(\d+))?|(\d+(?:\.\d+)?))")

def expected_from_dice(expr: str) -> float:
    """
    Average of a damage expression such as "2", "D3", "2D6+1" or "D3*2".
    Only D3 and D6 are supported; every operator needs a term on both sides.
    """
    s = expr.strip().lower().replace(" ", "")
    if not _EXPRESSION.fullmatch(s):
        raise InvalidArgumentError(f"Unsupported dice expression: {expr!r}")
    total = 0.0
    for sign, count, sides, mult, flat in _PART.findall(s):
        if sides:
            value = int(count or 1) * (int(sides) + 1) / 2 * int(mult or 1)
        else:
            value = float(flat)
        total += -value if sign == "-" else value
    return total
