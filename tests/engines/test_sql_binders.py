"""Unit tests for engines.sql.binders."""

import pytest

from sql_builder.core.property_path import UNDEFINED
from sql_builder.engines.sql.binders import BindCollector, param_name
from sql_builder.engines.sql.errors import BindConfigurationError, UnsupportedBindModeError
from sql_builder.models import BindTypeEnum


def test_param_name() -> None:
    assert param_name("name") == "name"
    assert param_name("user.address?.city") == "user_address_city"
    assert param_name(" a.b ") == "a_b"


class TestPostgres:
    def test_scalars_are_numbered(self):
        c = BindCollector(BindTypeEnum.POSTGRES)
        assert c.bind("a", 1) == "$1"
        assert c.bind("b", "x") == "$2"
        assert c.params == [1, "x"]

    def test_list_expands(self):
        c = BindCollector(BindTypeEnum.POSTGRES)
        c.bind("a", 0)
        assert c.bind("ids", [5, 6]) == "($2,$3)"
        assert c.params == [0, 5, 6]

    def test_undefined_binds_none(self):
        c = BindCollector(BindTypeEnum.POSTGRES)
        assert c.bind("a", UNDEFINED) == "$1"
        assert c.params == [None]

    def test_array_cast(self):
        c = BindCollector(BindTypeEnum.POSTGRES)
        assert c.bind_array_cast("ids", (1, 2), "::int[]") == "$1::int[]"
        assert c.params == [[1, 2]]

    def test_array_cast_required(self):
        c = BindCollector(BindTypeEnum.POSTGRES)
        with pytest.raises(BindConfigurationError, match="explicit cast"):
            c.bind_array_cast("ids", [1], None)


class TestMysql:
    def test_question_marks(self):
        c = BindCollector(BindTypeEnum.MYSQL)
        assert c.bind("a", 1) == "?"
        assert c.bind("ids", ["x", "y"]) == "(?,?)"
        assert c.params == [1, "x", "y"]

    def test_array_cast_unsupported(self):
        c = BindCollector(BindTypeEnum.MYSQL)
        with pytest.raises(UnsupportedBindModeError, match="postgres"):
            c.bind_array_cast("ids", [1], "::int[]")


class TestNamed:
    def test_oracle(self):
        c = BindCollector(BindTypeEnum.ORACLE)
        assert c.bind("user.name", "bob") == ":user_name"
        assert c.params == {"user_name": "bob"}

    def test_mssql(self):
        c = BindCollector(BindTypeEnum.MSSQL)
        assert c.bind("name", "bob") == "@name"
        assert c.params == {"name": "bob"}

    def test_list_expands(self):
        c = BindCollector(BindTypeEnum.ORACLE)
        assert c.bind("ids", [1, 2]) == "(:ids_0,:ids_1)"
        assert c.params == {"ids_0": 1, "ids_1": 2}

    def test_same_value_reuses_name(self):
        c = BindCollector(BindTypeEnum.MSSQL)
        assert c.bind("a", 1) == "@a"
        assert c.bind("a", 1) == "@a"
        assert c.params == {"a": 1}

    def test_different_value_gets_suffix(self):
        c = BindCollector(BindTypeEnum.MSSQL)
        assert c.bind("name", "x") == "@name"
        assert c.bind("name", "y") == "@name_1"
        assert c.bind("name", "z") == "@name_2"
        assert c.params == {"name": "x", "name_1": "y", "name_2": "z"}

    def test_true_and_one_are_different_values(self):
        c = BindCollector(BindTypeEnum.ORACLE)
        c.bind("v", 1)
        assert c.bind("v", True) == ":v_1"

    def test_array_cast_unsupported(self):
        c = BindCollector(BindTypeEnum.ORACLE)
        with pytest.raises(UnsupportedBindModeError):
            c.bind_array_cast("ids", [1], "::int[]")
