"""
Core helpers: builder settings and property path resolution.
"""

from sql_builder.core.config import SQLBuilderSettings
from sql_builder.core.property_path import UNDEFINED, get_property, has_property

__all__ = [
    "SQLBuilderSettings",
    "UNDEFINED",
    "get_property",
    "has_property",
]
