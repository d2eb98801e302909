"""Tables: columns, rows and row constraints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from tinysqldb.column import Column, ColumnConstraint, DatabaseError
from tinysqldb.row import Row


@dataclass
class Table:
    """A named table holding column definitions and rows."""

    name: str
    columns: list[Column] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)
    primary_key: str = ""
    foreign_keys: dict[str, str] = field(default_factory=dict)

    def add_column(self, column: Column) -> None:
        """Append a column definition."""
        self.columns.append(column)

    def add_row(self, row: Mapping[str, object]) -> Row:
        """Validate and append a row, filling auto-increment columns.

        Raises DatabaseError on a primary key or unique constraint violation.
        """
        record = row if isinstance(row, Row) else Row(row)
        self._validate_primary_key(record)
        self._validate_unique(record)
        self._apply_auto_increment(record)
        self.rows.append(record)
        return record

    def has_unique(self) -> bool:
        """Return True if any column carries a UNIQUE constraint."""
        return any(c.has_constraint(ColumnConstraint.UNIQUE) for c in self.columns)

    def _validate_primary_key(self, row: Row) -> None:
        if not self.primary_key:
            return
        if self.primary_key not in row:
            raise DatabaseError(f"primary key column {self.primary_key} not provided")
        value = row[self.primary_key]
        if any(existing.get(self.primary_key) == value for existing in self.rows):
            raise DatabaseError(f"primary key value {value} already exists")

    def _validate_unique(self, row: Row) -> None:
        for column in self.columns:
            if not column.has_constraint(ColumnConstraint.UNIQUE):
                continue
            value = row.get(column.name)
            if any(existing.get(column.name) == value for existing in self.rows):
                raise DatabaseError(f"unique constraint violation on column {column.name}")

    def _apply_auto_increment(self, row: Row) -> None:
        for column in self.columns:
            if not column.has_constraint(ColumnConstraint.AUTO_INCREMENT):
                continue
            if column.name in row:
                continue
            highest = max(
                (
                    value
                    for value in (existing.get(column.name) for existing in self.rows)
                    if isinstance(value, int) and not isinstance(value, bool) and value > 0
                ),
                default=0,
            )
            row[column.name] = highest + 1

    def __str__(self) -> str:
        columns = "".join(f"{column.name}\n" for column in self.columns)
        rows = "".join(f"{row}\n" for row in self.rows)
        return f"Table {self.name}\nColumns:\n{columns}Rows:\n{rows}"