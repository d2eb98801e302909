import pytest

from tinysqldb.column import (
    Column,
    ColumnConstraint,
    ColumnType,
    DatabaseError,
    is_valid_column_constraint,
    is_valid_column_type,
)


@pytest.mark.parametrize(
    "definition, col_type, constraints",
    [
        ("col INT", ColumnType.INT, []),
        ("col DOUBLE", ColumnType.DOUBLE, []),
        ("col FLOAT", ColumnType.FLOAT, []),
        ("col VARCHAR", ColumnType.VARCHAR, []),
        ("col BOOL", ColumnType.BOOL, []),
        ("col DATE", ColumnType.DATE, []),
        ("col ENUM", ColumnType.ENUM, []),
        ("col INT NULL", ColumnType.INT, [ColumnConstraint.NULL]),
        ("col INT NOT NULL", ColumnType.INT, [ColumnConstraint.NOT_NULL]),
        ("col INT UNIQUE", ColumnType.INT, [ColumnConstraint.UNIQUE]),
        ("col INT PRIMARY KEY", ColumnType.INT, [ColumnConstraint.PRIMARY_KEY]),
        ("col INT AUTO_INCREMENT", ColumnType.INT, [ColumnConstraint.AUTO_INCREMENT]),
    ],
)
def test_parse_column_def(definition, col_type, constraints):
    column = Column()
    column.parse_column_def(definition)
    assert column.name == "col"
    assert column.type == col_type
    assert column.constraints == constraints


def test_invalid_type_raises():
    with pytest.raises(DatabaseError, match="invalid column type"):
        Column().parse_column_def("col INVALID_TYPE")


def test_type_is_case_insensitive():
    column = Column()
    column.parse_column_def("  col varchar ")
    assert column.type is ColumnType.VARCHAR


def test_too_short_definition_raises():
    with pytest.raises(DatabaseError, match="invalid column definition"):
        Column().parse_column_def("col")


def test_foreign_key_reference():
    column = Column()
    column.parse_column_def("user_id INT FOREIGN KEY REFERENCES users(id)")
    assert column.constraints == [ColumnConstraint.FOREIGN_KEY]
    assert column.reference_table == "users"
    assert column.reference_column == "id"


@pytest.mark.parametrize("reference", ["users", "users()", "users)id("])
def test_bad_foreign_key_reference(reference):
    with pytest.raises(DatabaseError, match="invalid foreign key reference"):
        Column().parse_column_def(f"user_id INT FOREIGN KEY REFERENCES {reference}")


def test_unknown_constraint_raises():
    with pytest.raises(DatabaseError, match="invalid constraint: BOGUS"):
        Column().parse_column_def("col INT bogus")


def test_lowercase_null_after_not_is_rejected():
    with pytest.raises(DatabaseError, match="invalid constraint: NOT"):
        Column().parse_column_def("col INT not null")


def test_constraint_error_leaves_name_unset():
    column = Column()
    with pytest.raises(DatabaseError):
        column.parse_column_def("col INT UNIQUE WRONG")
    assert column.name == ""
    assert column.constraints == [ColumnConstraint.UNIQUE]


def test_constraints_accumulate_across_parses():
    column = Column()
    column.parse_column_def("id INT PRIMARY KEY")
    column.parse_column_def("name VARCHAR")
    assert column.name == "name"
    assert column.constraints == [ColumnConstraint.PRIMARY_KEY]


def test_has_constraint():
    column = Column()
    column.parse_column_def("id INT UNIQUE AUTO_INCREMENT")
    assert column.has_constraint(ColumnConstraint.UNIQUE)
    assert column.has_constraint(ColumnConstraint.AUTO_INCREMENT)
    assert not column.has_constraint(ColumnConstraint.NOT_NULL)


def test_validity_helpers():
    assert is_valid_column_type("INT")
    assert is_valid_column_type(ColumnType.DATE)
    assert not is_valid_column_type("int")
    assert not is_valid_column_type("")
    assert is_valid_column_constraint("NOT NULL")
    assert not is_valid_column_constraint("NOT")


def test_str():
    column = Column()
    column.parse_column_def("id INT NOT NULL UNIQUE")
    assert str(column) == "Name: id\nType: INT\nConstraints: [NOT NULL UNIQUE]\n"