"""
Engines: SQL template engine (SQLBuilder).
"""

from sql_builder.engines.sql import SQLBuilder, parse_parameters

__all__ = [
    "SQLBuilder",
    "parse_parameters",
]
