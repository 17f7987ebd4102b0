"""Safe arithmetic evaluation of part formulas.

Formulas are written against named design variables, e.g.
``total_height - 2 * material_thickness``. Evaluation substitutes every known
variable by its value (longest names first, so ``total_width`` is replaced
before any shorter name it contains), checks that only digits, whitespace,
``+ - * / ( )`` and ``.`` remain, and evaluates the residue with a small
recursive descent parser. Nothing outside that grammar is ever executed.

Any failure resolves to 0 and a logged warning; evaluation never raises.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping

logger = logging.getLogger(__name__)

__all__ = [
    "ExpressionSyntaxError",
    "evaluate_expression",
    "round_half_up",
    "substitute_variables",
    "unresolved_names",
]

SAFE_RESIDUE = re.compile(r"^[\d\s+\-*/().]+$")
IDENTIFIER = re.compile(r"[a-z_][a-z0-9_]*")
_NUMBER = re.compile(r"\d+\.?\d*|\.\d+")
_TOKEN = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|(\S))")

# Deepest parenthesis/sign nesting accepted before the parser gives up
MAX_NESTING_DEPTH = 64


class ExpressionSyntaxError(ValueError):
    """Raised by the parser when a residue is not a valid arithmetic expression."""

    pass


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going towards positive infinity.

    Unlike the built-in ``round`` this does not use banker's rounding, so
    ``round_half_up(2.5) == 3`` and ``round_half_up(-2.5) == -2``.
    """
    factor = 10**ndigits
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def _format_number(value: float) -> str:
    """Render a number without exponent notation so it stays in the grammar."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = f"{value:.10f}".rstrip("0").rstrip(".")
    return text


def substitute_variables(expression: str, context: Mapping[str, float]) -> str:
    """Replace variable names by their values, longest names first.

    Args:
        expression: Formula text. It is lower-cased and trimmed first.
        context: Variable mapping.

    Returns:
        The residue string after substitution.
    """
    processed = expression.lower().strip()
    for key in sorted(context, key=len, reverse=True):
        value = context[key]
        if not key or value is None:
            continue
        processed = processed.replace(key.lower(), _format_number(value))
    return processed


def unresolved_names(expression: str | float, context: Mapping[str, float]) -> list[str]:
    """List identifiers left in a formula after substitution.

    Used by configuration validation to report formulas that reference
    variables the context does not define.
    """
    if isinstance(expression, (int, float)):
        return []
    residue = substitute_variables(expression, context)
    return sorted(set(IDENTIFIER.findall(residue)))


class _ArithmeticParser:
    """Recursive descent parser over numbers, ``+ - * /`` and parentheses.

    Grammar::

        expr   := term (("+" | "-") term)*
        term   := unary (("*" | "/") unary)*
        unary  := ("+" | "-") unary | atom
        atom   := NUMBER | "(" expr ")"
    """

    def __init__(self, text: str) -> None:
        self._tokens = self._tokenize(text)
        self._pos = 0
        self._depth = 0

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        tokens: list[str] = []
        for match in _TOKEN.finditer(text):
            number, symbol = match.groups()
            tokens.append(number if number is not None else symbol)
        if not tokens:
            raise ExpressionSyntaxError("Empty expression")
        return tokens

    def _peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _consume(self) -> str:
        token = self._peek()
        if token is None:
            raise ExpressionSyntaxError("Unexpected end of expression")
        self._pos += 1
        return token

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise ExpressionSyntaxError("Expression nested too deeply")

    def parse(self) -> float:
        result = self._expr()
        if self._peek() is not None:
            raise ExpressionSyntaxError(f"Unexpected token: {self._peek()!r}")
        return result

    def _expr(self) -> float:
        left = self._term()
        while self._peek() in ("+", "-"):
            op = self._consume()
            right = self._term()
            left = left + right if op == "+" else left - right
        return left

    def _term(self) -> float:
        left = self._unary()
        while self._peek() in ("*", "/"):
            op = self._consume()
            right = self._unary()
            if op == "*":
                left = left * right
            else:
                left = left / right
        return left

    def _unary(self) -> float:
        if self._peek() in ("+", "-"):
            op = self._consume()
            self._enter()
            value = self._unary()
            self._depth -= 1
            return -value if op == "-" else value
        return self._atom()

    def _atom(self) -> float:
        token = self._consume()
        if token == "(":
            self._enter()
            value = self._expr()
            self._depth -= 1
            if self._consume() != ")":
                raise ExpressionSyntaxError("Expected ')'")
            return value
        if _NUMBER.fullmatch(token):
            return float(token)
        raise ExpressionSyntaxError(f"Unexpected token: {token!r}")


def evaluate_expression(expression: str | float, context: Mapping[str, float]) -> float:
    """Evaluate one formula against a variable mapping.

    Args:
        expression: A formula string, or a number which is returned unchanged.
        context: Variable name to value mapping.

    Returns:
        The result rounded to 2 decimal places, or 0 if the formula is unsafe,
        malformed or produces a non-finite value.

    Example:
        >>> evaluate_expression("total_height - 2 * thickness",
        ...                     {"total_height": 720, "thickness": 18})
        684.0
    """
    if isinstance(expression, (int, float)):
        return expression

    residue = substitute_variables(expression, context)
    if not SAFE_RESIDUE.match(residue):
        logger.warning(f"Unsafe expression detected: {expression!r} -> {residue!r}")
        return 0.0

    try:
        result = _ArithmeticParser(residue).parse()
    except ExpressionSyntaxError as e:
        logger.warning(f"Expression evaluation failed: {expression!r}: {e}")
        return 0.0
    except ZeroDivisionError:
        logger.warning(f"Division by zero in expression: {expression!r}")
        return 0.0

    if not math.isfinite(result):
        logger.warning(f"Expression produced a non-finite value: {expression!r}")
        return 0.0
    return round_half_up(result, 2)
