"""
SQL template engine (2-way SQL with /*BEGIN*/, /*IF*/, /*FOR*/, /*END*/ and
bind tags).

Exports: SQLBuilder, parse_parameters, and the error types.
"""

from sql_builder.engines.sql.errors import (
    BindConfigurationError,
    ConditionError,
    ConditionEvaluationError,
    ConditionSyntaxError,
    SQLBuilderError,
    TemplateScanError,
    TemplateStructureError,
    UnknownPropertyError,
    UnsupportedBindModeError,
    UnsupportedBindTypeError,
)
from sql_builder.engines.sql.parser import parse_parameters
from sql_builder.engines.sql.template_engine import SQLBuilder

__all__ = [
    "SQLBuilder",
    "parse_parameters",
    "SQLBuilderError",
    "ConditionError",
    "ConditionSyntaxError",
    "ConditionEvaluationError",
    "TemplateScanError",
    "TemplateStructureError",
    "UnknownPropertyError",
    "BindConfigurationError",
    "UnsupportedBindTypeError",
    "UnsupportedBindModeError",
]
