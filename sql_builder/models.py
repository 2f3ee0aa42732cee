"""
Enums shared by the SQL builder.

BindTypeEnum selects the placeholder syntax and bind parameter shape of
parameterized output; TagTypeEnum classifies ``/*...*/`` template tags.
"""

from enum import Enum

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class BindTypeEnum(str, Enum):
    """Supported bind styles for parameterized SQL.

    * ``POSTGRES`` - ``$1, $2, ...`` placeholders, bind params as a list.
    * ``MYSQL`` - ``?`` placeholders, bind params as a list (also SQLite).
    * ``ORACLE`` - ``:name`` placeholders, bind params as a dict (also SQLite).
    * ``MSSQL`` - ``@name`` placeholders, bind params as a dict.
    """

    POSTGRES = "postgres"
    MYSQL = "mysql"
    ORACLE = "oracle"
    MSSQL = "mssql"

    @property
    def is_positional(self) -> bool:
        return self in (BindTypeEnum.POSTGRES, BindTypeEnum.MYSQL)


class TagTypeEnum(str, Enum):
    """Kind of a ``/*...*/`` tag found in a template."""

    BEGIN = "BEGIN"
    IF = "IF"
    FOR = "FOR"
    END = "END"
    BIND = "BIND"

    @property
    def opens_block(self) -> bool:
        return self in (TagTypeEnum.BEGIN, TagTypeEnum.IF, TagTypeEnum.FOR)
