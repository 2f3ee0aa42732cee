"""
sql-builder: dynamic SQL from 2-way SQL templates.

    builder = SQLBuilder()
    sql = builder.generate_sql(template, {"ids": [1, 2]})
    sql, params = builder.generate_parameterized_sql(template, {"ids": [1, 2]}, "postgres")
"""

from sql_builder.core.config import SQLBuilderSettings
from sql_builder.core.property_path import UNDEFINED
from sql_builder.engines.sql import (
    BindConfigurationError,
    ConditionError,
    ConditionEvaluationError,
    ConditionSyntaxError,
    SQLBuilder,
    SQLBuilderError,
    TemplateScanError,
    TemplateStructureError,
    UnknownPropertyError,
    UnsupportedBindModeError,
    UnsupportedBindTypeError,
    parse_parameters,
)
from sql_builder.models import BindTypeEnum

__version__ = "1.2.4"

__all__ = [
    "SQLBuilder",
    "SQLBuilderSettings",
    "BindTypeEnum",
    "UNDEFINED",
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
