"""
Errors raised by the SQL builder.

Every error is a ``ValueError`` subclass: they all describe a defect in the
template, the bind entity or the builder configuration, never a transient
failure, so callers should fix the input rather than retry.
"""

from __future__ import annotations


class SQLBuilderError(ValueError):
    """Base class for all SQL builder errors."""

    pass


# ---------------------------------------------------------------------------
# Condition expressions (/*IF ...*/)
# ---------------------------------------------------------------------------


class ConditionError(SQLBuilderError):
    """Raised when an IF condition cannot be tokenized, parsed or evaluated."""

    def __init__(self, message: str, expression: str) -> None:
        super().__init__(f"{message} (condition: {expression!r})")
        self.expression = expression


class ConditionSyntaxError(ConditionError):
    """Unexpected character, unterminated string, mismatched parentheses or
    a malformed operand/operator sequence."""

    pass


class ConditionEvaluationError(ConditionError):
    """An operator the evaluator does not implement reached the RPN stage."""

    pass


# ---------------------------------------------------------------------------
# Template scanning / structure
# ---------------------------------------------------------------------------


def _line_col(template: str, offset: int) -> tuple[int, int]:
    line = template.count("\n", 0, offset) + 1
    column = offset - (template.rfind("\n", 0, offset) + 1) + 1
    return line, column


class TemplateScanError(SQLBuilderError):
    """Unterminated quote/parenthesis (or a stray ``)``) in a bind dummy value."""

    def __init__(self, message: str, template: str, offset: int) -> None:
        line, column = _line_col(template, offset)
        super().__init__(f"{message} at offset {offset} (line {line}, column {column})")
        self.offset = offset
        self.line = line
        self.column = column


class TemplateStructureError(SQLBuilderError):
    """Unbalanced BEGIN/IF/FOR/END tags or a malformed FOR tag."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------


class UnknownPropertyError(SQLBuilderError):
    """A BIND tag references a property the entity does not have."""

    def __init__(self, property_path: str, offset: int) -> None:
        super().__init__(
            f"Unknown property '{property_path}' referenced by bind tag at offset {offset}"
        )
        self.property_path = property_path
        self.offset = offset


class BindConfigurationError(SQLBuilderError):
    """Parameterized generation is not configured correctly (no bind type,
    missing explicit ``::type[]`` cast, ...)."""

    pass


class UnsupportedBindTypeError(BindConfigurationError):
    """The bind type selector is not one of the supported dialects."""

    pass


class UnsupportedBindModeError(SQLBuilderError):
    """A bind construct cannot be rendered in the requested mode."""

    pass
