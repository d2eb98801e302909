import datetime

from tinysqldb.row import Row


def test_empty_row_str():
    assert str(Row()) == "{}"


def test_row_str_lists_columns_in_order():
    assert str(Row(id=1, name="Alice")) == "{id: 1, name: Alice}"


def test_bool_formatting():
    assert str(Row(active=True)) == "{active: true}"


def test_integral_float_prints_like_int():
    assert str(Row(x=2.0)) == str(Row(x=2))


def test_fractional_float_keeps_digits():
    assert "1.5" in str(Row(x=1.5))


def test_date_formatting_contains_iso_date():
    text = str(Row(d=datetime.date(2024, 1, 2)))
    assert "2024-01-02" in text


def test_row_behaves_as_dict():
    row = Row(id=1)
    row["name"] = "Bob"
    assert row == {"id": 1, "name": "Bob"}
    assert list(row) == ["id", "name"]