"""Column definitions: types, constraints and definition parsing."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class DatabaseError(Exception):
    """Raised when a statement, definition or row cannot be accepted."""


class ColumnType(str, Enum):
    """Data types a column may hold."""

    INT = "INT"
    DOUBLE = "DOUBLE"
    FLOAT = "FLOAT"
    VARCHAR = "VARCHAR"
    BOOL = "BOOL"
    DATE = "DATE"
    ENUM = "ENUM"

    def __str__(self) -> str:
        return self.value


class ColumnConstraint(str, Enum):
    """Constraints that may be attached to a column."""

    NULL = "NULL"
    NOT_NULL = "NOT NULL"
    UNIQUE = "UNIQUE"
    PRIMARY_KEY = "PRIMARY KEY"
    FOREIGN_KEY = "FOREIGN KEY"
    AUTO_INCREMENT = "AUTO_INCREMENT"

    def __str__(self) -> str:
        return self.value


def is_valid_column_type(value: object) -> bool:
    """Return True if ``value`` names a known column type (case-sensitive)."""
    try:
        ColumnType(value)
    except ValueError:
        return False
    return True


def is_valid_column_constraint(value: object) -> bool:
    """Return True if ``value`` names a known column constraint (case-sensitive)."""
    try:
        ColumnConstraint(value)
    except ValueError:
        return False
    return True


@dataclass
class Column:
    """A table column with its type, constraints and optional foreign reference."""

    name: str = ""
    type: ColumnType | None = None
    constraints: list[ColumnConstraint] = field(default_factory=list)
    reference_table: str = ""
    reference_column: str = ""

    def __str__(self) -> str:
        type_name = self.type.value if self.type is not None else ""
        constraints = " ".join(c.value for c in self.constraints)
        return f"Name: {self.name}\nType: {type_name}\nConstraints: [{constraints}]\n"

    def parse_column_def(self, column_def: str) -> None:
        """Fill this column from a definition such as ``"id INT NOT NULL"``.

        Constraints found are appended to those already present.
        """
        parts = column_def.split()
        if len(parts) < 2:
            raise DatabaseError("invalid column definition")

        type_name = parts[1].upper()
        if not is_valid_column_type(type_name):
            raise DatabaseError("invalid column type")

        self.parse_constraints(parts[2:])
        self.name = parts[0]
        self.type = ColumnType(type_name)

    def parse_constraints(self, parts: Iterable[str]) -> None:
        """Append the constraints named by the given tokens."""
        tokens = deque(parts)
        while tokens:
            keyword = tokens.popleft().upper()
            if keyword == "NOT" and tokens and tokens[0] == "NULL":
                tokens.popleft()
                self.constraints.append(ColumnConstraint.NOT_NULL)
            elif keyword == "PRIMARY" and tokens and tokens[0] == "KEY":
                tokens.popleft()
                self.constraints.append(ColumnConstraint.PRIMARY_KEY)
            elif (
                keyword == "FOREIGN"
                and len(tokens) >= 3
                and tokens[0].upper() == "KEY"
                and tokens[1].upper() == "REFERENCES"
            ):
                self.constraints.append(ColumnConstraint.FOREIGN_KEY)
                self._set_reference(tokens[2])
                for _ in range(3):
                    tokens.popleft()
            else:
                try:
                    constraint = ColumnConstraint(keyword)
                except ValueError:
                    raise DatabaseError(f"invalid constraint: {keyword}") from None
                self.constraints.append(constraint)

    def _set_reference(self, reference: str) -> None:
        open_at = reference.find("(")
        close_at = reference.find(")")
        if open_at == -1 or close_at == -1 or close_at <= open_at + 1:
            raise DatabaseError("invalid foreign key reference")
        self.reference_table = reference[:open_at]
        self.reference_column = reference[open_at + 1 : close_at]

    def has_constraint(self, constraint: ColumnConstraint | str) -> bool:
        """Return True if the column carries ``constraint``."""
        return constraint in self.constraints