"""A small file-backed SQL database: statement parsing, execution and storage."""

from __future__ import annotations

import datetime
import json
import math
import pickle
import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Sequence

from tinysqldb.column import Column, ColumnType, DatabaseError, is_valid_column_type
from tinysqldb.row import Row, _format_value
from tinysqldb.table import Table

FILE_SUFFIX = ".db"

_FLAGS = re.IGNORECASE | re.ASCII
_CREATE_RE = re.compile(r"CREATE TABLE (\w+)\s*\((.+)\)", _FLAGS)
_INSERT_RE = re.compile(r"INSERT INTO (\w+)\s*\((.+)\)\s*VALUES\s*\((.+)\)", _FLAGS)
_SELECT_RE = re.compile(r"SELECT (.+) FROM (\w+)(?: WHERE (.+))?", _FLAGS)
_DELETE_RE = re.compile(r"DELETE FROM (\w+)(?: WHERE (.+))?", _FLAGS)
_UPDATE_RE = re.compile(r"UPDATE (\w+)\s+SET (.+)\s+WHERE (.+)", _FLAGS)
_DROP_RE = re.compile(r"DROP TABLE (\w+)", _FLAGS)

_INT_PREFIX = re.compile(r"[+-]?[0-9]+")
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:inf|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)", re.IGNORECASE
)
_DATE_FORMAT = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_QUOTES = "'\""


def _conversion_error(column_type: ColumnType) -> DatabaseError:
    return DatabaseError(f"invalid value for column type {column_type}")


def _parse_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(text)
    number = int(match.group())
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(text)
    return number


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(text)
    return float(match.group())


def _parse_bool(text: str) -> bool:
    lowered = text.lower()
    if not lowered:
        raise ValueError(text)
    first = lowered[0]
    if first in "01":
        return first == "1"
    if first == "t":
        if lowered[1:2] == "r" and lowered[2:4] != "ue":
            raise ValueError(text)
        return True
    if first == "f":
        if lowered[1:2] == "a" and lowered[2:5] != "lse":
            raise ValueError(text)
        return False
    raise ValueError(text)


def _parse_date(text: str) -> datetime.date:
    if _DATE_FORMAT.fullmatch(text) is None:
        raise ValueError(text)
    return datetime.date.fromisoformat(text)


_PARSERS = {
    ColumnType.INT: _parse_int,
    ColumnType.DOUBLE: _parse_float,
    ColumnType.FLOAT: _parse_float,
    ColumnType.BOOL: _parse_bool,
    ColumnType.DATE: _parse_date,
}


def convert_value(column_type: ColumnType | str | None, value: str) -> object:
    """Convert the literal ``value`` to the Python value a column of ``column_type`` holds.

    Unknown or missing types, and ENUM, keep the literal unchanged.
    """
    if column_type is None or not is_valid_column_type(column_type):
        return value
    kind = ColumnType(column_type)
    if kind is ColumnType.VARCHAR:
        return value.strip(_QUOTES)
    parser = _PARSERS.get(kind)
    if parser is None:
        return value
    try:
        return parser(value)
    except ValueError:
        raise _conversion_error(kind) from None


def _json_value(value: object) -> object:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise DatabaseError(f"json: unsupported value: {_format_value(value)}")
        if value.is_integer() and abs(value) < 1e21:
            return int(value)
        return value
    if isinstance(value, datetime.datetime):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, datetime.date):
        return f"{value.isoformat()}T00:00:00Z"
    return value


def _to_json(rows: Sequence[Row]) -> str:
    if not rows:
        return "null"
    ready = [{name: _json_value(value) for name, value in row.items()} for row in rows]
    return json.dumps(ready, indent=2, sort_keys=True, ensure_ascii=False)


def _column_type(table: Table, name: str) -> ColumnType | None:
    return next((column.type for column in table.columns if column.name == name), None)


def _matches(row: Row, where_clause: str) -> bool:
    parts = where_clause.split("=")
    if len(parts) != 2:
        return False
    column = parts[0].strip()
    expected = parts[1].strip().strip(_QUOTES)
    if column not in row:
        return False
    return _format_value(row[column]) == expected


def _load(path: Path) -> Database:
    try:
        with path.open("rb") as handle:
            loaded = pickle.load(handle)
    except (OSError, EOFError, pickle.UnpicklingError, AttributeError, ImportError, TypeError, ValueError) as exc:
        raise DatabaseError(f"cannot load {path}: {exc}") from exc
    if not isinstance(loaded, Database):
        raise DatabaseError(f"cannot load {path}: not a database file")
    return loaded


@dataclass
class Database:
    """A named collection of tables stored in ``<name>.db``."""

    name: str
    tables: dict[str, Table] = field(default_factory=dict)

    @property
    def path(self) -> Path:
        """The file the database is stored in."""
        return Path(f"{self.name}{FILE_SUFFIX}")

    def save(self) -> None:
        """Write the database to its file."""
        with self.path.open("wb") as handle:
            pickle.dump(self, handle)

    def _snapshot(self) -> Database:
        return _load(self.path)

    @contextmanager
    def _editing(self) -> Iterator[Database]:
        snapshot = self._snapshot()
        yield snapshot
        snapshot.save()
        self.tables = snapshot.tables

    def execute(self, sql: str) -> str:
        """Run one SQL statement and return its textual result."""
        keyword = sql.upper()
        if keyword.startswith("CREATE TABLE"):
            match = _CREATE_RE.fullmatch(sql)
            if match is None:
                raise DatabaseError("invalid CREATE TABLE syntax")
            return self.create_table(match.group(1), match.group(2).split(","))
        if keyword.startswith("DROP TABLE"):
            match = _DROP_RE.fullmatch(sql)
            if match is None:
                raise DatabaseError("invalid DROP TABLE syntax")
            return self.drop_table(match.group(1))
        if keyword.startswith("DELETE FROM"):
            match = _DELETE_RE.fullmatch(sql)
            if match is None:
                raise DatabaseError("invalid DELETE syntax")
            return self.delete(match.group(1), match.group(2) or "")
        if keyword.startswith("INSERT INTO"):
            match = _INSERT_RE.fullmatch(sql)
            if match is None:
                raise DatabaseError("invalid INSERT syntax")
            return self.insert(match.group(1), match.group(2).split(","), match.group(3).split(","))
        if keyword.startswith("UPDATE"):
            match = _UPDATE_RE.fullmatch(sql)
            if match is None:
                raise DatabaseError("invalid UPDATE syntax")
            return self.update(match.group(1), match.group(2), match.group(3))
        if keyword.startswith("SELECT"):
            match = _SELECT_RE.fullmatch(sql)
            if match is None:
                raise DatabaseError("invalid SELECT syntax")
            return self.select(match.group(2), match.group(1).split(","), match.group(3) or "")
        raise DatabaseError("unsupported SQL command")

    def create_table(self, name: str, column_defs: Sequence[str]) -> str:
        """Create a table from column definitions such as ``"id INT NOT NULL"``."""
        with self._editing() as snapshot:
            if name in snapshot.tables:
                raise DatabaseError(f"table {name} already exists")
            table = Table(name)
            for definition in column_defs:
                column = Column()
                column.parse_column_def(definition)
                if column.reference_table and column.reference_column:
                    if column.reference_table not in snapshot.tables:
                        raise DatabaseError(
                            f"foreign key table {column.reference_table} does not exist"
                        )
                table.add_column(column)
            snapshot.tables[name] = table
        return f"Table {name} created"

    def drop_table(self, name: str) -> str:
        """Remove a table; dropping a missing table is not an error."""
        with self._editing() as snapshot:
            snapshot.tables.pop(name, None)
        return f"Table {name} dropped"

    def _table(self, snapshot: Database, table_name: str) -> Table:
        table = snapshot.tables.get(table_name)
        if table is None:
            raise DatabaseError(f"table {table_name} does not exist")
        return table

    def insert(self, table_name: str, columns: Sequence[str], values: Sequence[str]) -> str:
        """Insert one row built from parallel column and value literals."""
        with self._editing() as snapshot:
            table = self._table(snapshot, table_name)
            if len(columns) != len(values):
                raise DatabaseError("column count does not match value count")
            row = Row()
            for raw_column, raw_value in zip(columns, values):
                column = raw_column.strip()
                row[column] = convert_value(_column_type(table, column), raw_value.strip())
            table.add_row(row)
        return "1 row inserted"

    def delete(self, table_name: str, where_clause: str) -> str:
        """Delete the rows matching ``where_clause``, or every row if it is empty."""
        with self._editing() as snapshot:
            table = self._table(snapshot, table_name)
            if not table.rows:
                raise DatabaseError(f"table {table_name} is empty")
            kept = [row for row in table.rows if where_clause and not _matches(row, where_clause)]
            removed = len(table.rows) - len(kept)
            table.rows = kept
        return f"{removed} rows deleted"

    def select(self, table_name: str, columns: Sequence[str], where_clause: str) -> str:
        """Return the matching rows, projected onto ``columns``, as indented JSON."""
        table = self._table(self._snapshot(), table_name)
        wanted = [column.strip() for column in columns]
        results = []
        for row in table.rows:
            if where_clause and not _matches(row, where_clause):
                continue
            result = Row()
            for column in wanted:
                if column == "*":
                    result.update(row)
                elif column in row:
                    result[column] = row[column]
                else:
                    raise DatabaseError(f"column {column} not found")
            results.append(result)
        return _to_json(results)

    def update(self, table_name: str, set_clause: str, where_clause: str) -> str:
        """Assign the values of ``set_clause`` to every row matching ``where_clause``."""
        with self._editing() as snapshot:
            table = self._table(snapshot, table_name)
            if not table.rows:
                raise DatabaseError(f"table {table_name} is empty")
            targets = [row for row in table.rows if _matches(row, where_clause)]
            if not targets:
                raise DatabaseError("no rows found")
            for assignment in set_clause.split(","):
                parts = assignment.split("=")
                if len(parts) != 2:
                    raise DatabaseError(f"invalid set clause: {assignment}")
                column = parts[0].strip()
                column_type = _column_type(table, column)
                if column_type is None or not is_valid_column_type(column_type):
                    shown = column_type.value if column_type is not None else ""
                    raise DatabaseError(f"invalid column type: {shown}")
                value = convert_value(column_type, parts[1].strip())
                for row in targets:
                    row[column] = value
        return f"{len(targets)} rows updated"

    def all_tables(self) -> dict[str, Table]:
        """Return the tables as currently stored on disk."""
        return self._snapshot().tables

    def __str__(self) -> str:
        return "Tables:\n" + "".join(f"{table}\n" for table in self.tables.values())


def open_database(name: str) -> Database:
    """Open the database stored under ``name``, creating an empty one if it cannot be loaded."""
    try:
        return _load(Path(f"{name}{FILE_SUFFIX}"))
    except DatabaseError:
        database = Database(name)
        database.save()
        return database