from __future__ import annotations


class MathhammerError(ValueError):
    """Base class for calculator errors."""


class InvalidArgumentError(MathhammerError):
    """A roll threshold or profile field is outside its valid range."""


class UnknownPolicyError(MathhammerError):
    """A reroll or auto-wound policy holds a value outside its enum."""
