"""
Condition expressions attached to briefing content.

Supported forms:
  - ``true`` / ``false``
  - ``<path> <op> <operand>`` with ``op`` in ``>= <= == != > <``
  - a flat sequence of comparisons joined by ``&&`` or by ``||``

Paths are ``party.<stat>`` or ``demographics.<name>.<stat>``; operands are a
double-quoted string, a bare decimal number or another path. Evaluation never
raises: anything that cannot be parsed or compared is ``False`` and any path
that cannot be resolved is ``0.0``.
"""

from __future__ import annotations

import logging
import operator
import re
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from game.entities import Demographic
from game.world.state import GameState, is_number, normalise_demographics

logger = logging.getLogger(__name__)

# Two-character operators first so ">=" is never split as ">".
OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    "<": operator.lt,
}
NUMERIC_LITERAL = re.compile(r"^\d+\.?\d*$")
MISSING = 0.0


class ConditionEvaluator:
    def __init__(
        self,
        party_stats: Optional[Mapping[str, Any]],
        demographics: Optional[Iterable[Demographic]],
    ) -> None:
        self._party_stats: Mapping[str, Any] = party_stats if isinstance(party_stats, Mapping) else {}
        self._demographics: Tuple[Demographic, ...] = normalise_demographics(demographics)

    @classmethod
    def for_state(cls, state: GameState) -> "ConditionEvaluator":
        return cls(state.party_stats, state.demographics)

    def evaluate(self, expression: Any) -> bool:
        if not isinstance(expression, str):
            logger.warning("briefing.condition.invalid", extra={"condition": repr(expression)})
            return False
        expression = expression.strip()
        if expression == "true":
            return True
        if expression == "false":
            return False

        if "&&" in expression:
            return all(self.evaluate(part) for part in expression.split("&&"))
        if "||" in expression:
            return any(self.evaluate(part) for part in expression.split("||"))

        return self._evaluate_comparison(expression)

    def _evaluate_comparison(self, condition: str) -> bool:
        try:
            symbol = next((op for op in OPERATORS if op in condition), None)
            if symbol is None:
                logger.warning("briefing.condition.no_operator", extra={"condition": condition})
                return False

            parts = [part.strip() for part in condition.split(symbol)]
            if len(parts) != 2 or not all(parts):
                logger.warning("briefing.condition.malformed", extra={"condition": condition})
                return False

            left = self.resolve_value(parts[0])
            right = self.resolve_value(parts[1])
            return bool(OPERATORS[symbol](left, right))
        except Exception as exc:
            logger.warning(
                "briefing.condition.failed",
                extra={"condition": condition, "error": str(exc)},
            )
            return False

    def resolve_value(self, token: str) -> Any:
        token = token.strip()
        if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
            return token[1:-1]
        if NUMERIC_LITERAL.match(token):
            return float(token)
        return self.resolve_path(token)

    def resolve_path(self, path: str) -> Any:
        namespace, *rest = path.split(".")
        if namespace == "party":
            return _walk(self._party_stats, rest)
        if namespace == "demographics" and rest:
            demographic = self._find_demographic(rest[0])
            if demographic is None:
                return MISSING
            return _walk(demographic.stats, rest[1:])
        return MISSING

    def _find_demographic(self, name: str) -> Optional[Demographic]:
        for demographic in self._demographics:
            if demographic.matches(name):
                return demographic
        return None


def _walk(root: Any, keys: Sequence[str]) -> Any:
    value = root
    for key in keys:
        if not isinstance(value, Mapping):
            return MISSING
        value = value.get(key)
        if value is None:
            return MISSING
    return value if is_number(value) else MISSING


def evaluate_condition(
    expression: str,
    party_stats: Optional[Mapping[str, Any]] = None,
    demographics: Optional[Iterable[Demographic]] = None,
) -> bool:
    return ConditionEvaluator(party_stats, demographics).evaluate(expression)


__all__ = ["ConditionEvaluator", "OPERATORS", "evaluate_condition"]
