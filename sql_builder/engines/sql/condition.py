"""
Condition expressions for ``/*IF ...*/`` tags.

A deliberately small language, evaluated without ``eval``:

    tokenize()      "a != null && a.length > 2"  -> list[Token]
    to_rpn()        infix tokens -> postfix (shunting-yard)
    evaluate_rpn()  postfix tokens + entity -> value

Supported: property paths (``a.b``, ``a?.b``), numbers, quoted strings,
``true``/``false``/``null``/``undefined``, parentheses, ``!`` and the binary
operators ``== != === !== < <= > >= && ||`` with JavaScript semantics
(see ``operators``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sql_builder.core.property_path import UNDEFINED, describe_entity, get_property
from sql_builder.engines.sql.errors import (
    ConditionError,
    ConditionEvaluationError,
    ConditionSyntaxError,
)
from sql_builder.engines.sql.operators import BINARY_OPERATORS, UNARY_OPERATORS, is_truthy

_log = logging.getLogger(__name__)


class TokenType(str, Enum):
    IDENTIFIER = "IDENTIFIER"
    OPERATOR = "OPERATOR"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    UNDEFINED = "UNDEFINED"
    STRING = "STRING"
    PARENTHESIS = "PARENTHESIS"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any = None


_LITERAL_TYPES = frozenset(
    {
        TokenType.NUMBER,
        TokenType.BOOLEAN,
        TokenType.NULL,
        TokenType.UNDEFINED,
        TokenType.STRING,
    }
)

# Longest operators first.
_OPERATORS_3 = ("===", "!==")
_OPERATORS_2 = ("==", "!=", "<=", ">=", "&&", "||")
_OPERATORS_1 = ("<", ">", "!", "=")

# (precedence, right_associative)
_PRECEDENCE: dict[str, tuple[int, bool]] = {
    "||": (1, False),
    "&&": (2, False),
    "==": (3, False),
    "!=": (3, False),
    "===": (3, False),
    "!==": (3, False),
    "<": (4, False),
    "<=": (4, False),
    ">": (4, False),
    ">=": (4, False),
    "!": (5, True),
}

_NUMBER_RE = re.compile(r"-?\d+(\.\d+)?")
_IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*(?:\??\.[\w$]+)*")

_KEYWORDS: dict[str, Token] = {
    "true": Token(TokenType.BOOLEAN, True),
    "false": Token(TokenType.BOOLEAN, False),
    "null": Token(TokenType.NULL, None),
    "undefined": Token(TokenType.UNDEFINED, UNDEFINED),
}


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


def _read_string(condition: str, start: int) -> tuple[str, int]:
    """Read a quoted literal starting at *start*; return (value, next index)."""
    quote = condition[start]
    chars: list[str] = []
    i = start + 1
    length = len(condition)
    while i < length:
        c = condition[i]
        if c == "\\" and i + 1 < length:
            chars.append(condition[i + 1])
            i += 2
            continue
        if c == quote:
            return "".join(chars), i + 1
        chars.append(c)
        i += 1
    raise ConditionSyntaxError(f"Unterminated string literal starting at index {start}", condition)


def tokenize(condition: str) -> list[Token]:
    """Split *condition* into tokens. Raises ConditionSyntaxError."""
    tokens: list[Token] = []
    i = 0
    length = len(condition)
    while i < length:
        ch = condition[i]
        if ch.isspace():
            i += 1
            continue

        chunk3 = condition[i : i + 3]
        if chunk3 in _OPERATORS_3:
            tokens.append(Token(TokenType.OPERATOR, chunk3))
            i += 3
            continue
        chunk2 = condition[i : i + 2]
        if chunk2 in _OPERATORS_2:
            tokens.append(Token(TokenType.OPERATOR, chunk2))
            i += 2
            continue
        if ch in _OPERATORS_1:
            tokens.append(Token(TokenType.OPERATOR, ch))
            i += 1
            continue
        if ch in "()":
            tokens.append(Token(TokenType.PARENTHESIS, ch))
            i += 1
            continue

        m = _NUMBER_RE.match(condition, i)
        if m:
            text = m.group(0)
            tokens.append(Token(TokenType.NUMBER, float(text) if m.group(1) else int(text)))
            i = m.end()
            continue

        if ch in ("'", '"'):
            value, i = _read_string(condition, i)
            tokens.append(Token(TokenType.STRING, value))
            continue

        m = _IDENT_RE.match(condition, i)
        if m:
            ident = m.group(0)
            tokens.append(_KEYWORDS.get(ident) or Token(TokenType.IDENTIFIER, ident))
            i = m.end()
            continue

        raise ConditionSyntaxError(f"Unexpected character {ch!r} at index {i}", condition)
    return tokens


# ---------------------------------------------------------------------------
# Shunting-yard
# ---------------------------------------------------------------------------


def _is_open_paren(token: Token) -> bool:
    return token.type == TokenType.PARENTHESIS and token.value == "("


def to_rpn(tokens: list[Token], condition: str = "") -> list[Token]:
    """Convert infix *tokens* to reverse polish notation."""
    output: list[Token] = []
    stack: list[Token] = []

    for token in tokens:
        if token.type in _LITERAL_TYPES or token.type == TokenType.IDENTIFIER:
            output.append(token)
        elif token.type == TokenType.OPERATOR:
            prec, right_assoc = _PRECEDENCE.get(token.value, (0, False))
            while stack and not _is_open_paren(stack[-1]):
                top_prec = _PRECEDENCE.get(stack[-1].value, (0, False))[0]
                if top_prec > prec or (top_prec == prec and not right_assoc):
                    output.append(stack.pop())
                else:
                    break
            stack.append(token)
        elif token.value == "(":
            stack.append(token)
        else:
            while stack and not _is_open_paren(stack[-1]):
                output.append(stack.pop())
            if not stack:
                raise ConditionSyntaxError("Mismatched parentheses", condition)
            stack.pop()

    while stack:
        op = stack.pop()
        if op.type == TokenType.PARENTHESIS:
            raise ConditionSyntaxError("Mismatched parentheses", condition)
        output.append(op)
    return output


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def evaluate_rpn(rpn: list[Token], entity: Any, condition: str = "") -> Any:
    """Evaluate *rpn* against *entity*; returns the raw (not booleanized) value."""
    stack: list[Any] = []

    def pop() -> Any:
        if not stack:
            raise ConditionSyntaxError("Invalid expression", condition)
        return stack.pop()

    for token in rpn:
        if token.type in _LITERAL_TYPES:
            stack.append(token.value)
        elif token.type == TokenType.IDENTIFIER:
            stack.append(get_property(entity, token.value))
        elif token.type == TokenType.OPERATOR:
            unary = UNARY_OPERATORS.get(token.value)
            if unary is not None:
                stack.append(unary(pop()))
                continue
            binary = BINARY_OPERATORS.get(token.value)
            if binary is None:
                raise ConditionEvaluationError(f"Unknown operator: {token.value}", condition)
            right = pop()
            left = pop()
            stack.append(binary(left, right))
        else:
            raise ConditionEvaluationError(f"Unexpected token in RPN: {token.type.value}", condition)

    if len(stack) != 1:
        raise ConditionSyntaxError("Invalid expression", condition)
    return stack[0]


def evaluate_condition(condition: str, entity: Any) -> bool:
    """
    Evaluate an IF condition such as ``names != null && names.length > 0``
    against *entity*. Missing properties are falsy; syntax errors raise.
    """
    try:
        rpn = to_rpn(tokenize(condition), condition)
        return is_truthy(evaluate_rpn(rpn, entity, condition))
    except ConditionError as e:
        _log.warning(
            "Error evaluating condition %r (entity keys: %s): %s", condition, describe_entity(entity), e
        )
        raise
