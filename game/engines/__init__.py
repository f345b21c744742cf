"""Briefing engines (condition evaluation, composition, RNG)."""

from .briefing import BriefingCompositor, generate_briefing
from .conditions import ConditionEvaluator, evaluate_condition
from .rng import RNG

__all__ = [
    "BriefingCompositor",
    "ConditionEvaluator",
    "RNG",
    "evaluate_condition",
    "generate_briefing",
]
