# tinysqldb

A tiny SQL database that keeps all of its tables in a single file and comes
with an interactive shell. It understands a small subset of SQL. It is meant
for experiments and teaching, not for real workloads.

## Installation

```
pip install .
```

## The shell

```
tinysqldb [DATABASE] [--history FILE]
```

`DATABASE` defaults to `testdb`; the tables are stored in `DATABASE.db` in
the current directory, which is created if it does not exist or cannot be
read. When input comes from a terminal, line history is kept in `FILE`
(by default `sql_history.tmp` in the system temporary directory).

The shell prints `sql> ` and runs one statement per line. Type `exit`, or
press Ctrl+C or Ctrl+D, to leave. Errors are printed as `Error: ...` and the
shell carries on.

```
sql> CREATE TABLE users (id INT PRIMARY KEY AUTO_INCREMENT, name VARCHAR)
Table users created
sql> INSERT INTO users (name) VALUES ('Alice')
1 row inserted
sql> SELECT * FROM users WHERE id = 1
[
  {
    "id": 1,
    "name": "Alice"
  }
]
```

## Supported statements

- `CREATE TABLE name (col TYPE [constraints], ...)`
- `DROP TABLE name` (dropping a missing table is not an error)
- `INSERT INTO name (col, ...) VALUES (val, ...)`
- `SELECT cols FROM name [WHERE col = value]` (`*` selects every column)
- `UPDATE name SET col = value, ... WHERE col = value`
- `DELETE FROM name [WHERE col = value]` (without `WHERE`, every row goes)

Keywords are case-insensitive. `SELECT` returns the rows as indented JSON
with sorted keys, or `null` when no row matches.

The column types are `INT`, `DOUBLE`, `FLOAT`, `VARCHAR`, `BOOL`, `DATE`
(in `YYYY-MM-DD` form) and `ENUM`. The constraints are `NULL`, `NOT NULL`,
`UNIQUE`, `PRIMARY KEY`, `AUTO_INCREMENT` and
`FOREIGN KEY REFERENCES table(column)`.

## Library use

```python
from tinysqldb.database import open_database
from tinysqldb.column import DatabaseError

db = open_database("mydb")
print(db.execute("CREATE TABLE items (id INT, label VARCHAR)"))
print(db.execute("INSERT INTO items (id, label) VALUES (1, 'pen')"))
print(db.execute("SELECT label FROM items WHERE id = 1"))

try:
    db.execute("SELECT * FROM missing")
except DatabaseError as exc:
    print("Error:", exc)
```

- `tinysqldb.database` — `open_database(name)`, the `Database` class
  (`execute`, `create_table`, `drop_table`, `insert`, `select`, `update`,
  `delete`, `all_tables`, `save`) and `convert_value(column_type, value)`.
- `tinysqldb.table` — `Table`, with `add_column`, `add_row` and `has_unique`.
- `tinysqldb.column` — `Column`, `ColumnType`, `ColumnConstraint`,
  `DatabaseError`, `is_valid_column_type` and `is_valid_column_constraint`.
- `tinysqldb.row` — `Row`, a `dict` of column names to values.
- `tinysqldb.cli` — `main(argv=None)`, the shell.

Every statement reads the tables from the file and writes them back when it
changes something; `all_tables()` returns the tables as stored on disk.

## What it does not do

- A `WHERE` clause is a single `col = value` test, compared as text; there
  are no other operators, no `AND`/`OR`, no joins, ordering or aggregates.
- Values are split on commas, so a string value cannot contain a comma.
- `UNIQUE` is enforced and `AUTO_INCREMENT` fills missing integers, but
  `NOT NULL` and `PRIMARY KEY` are not checked on insert, and a foreign key
  only checks that the referenced table exists when the table is created.
- There are no transactions, no locking and no server; one file holds one
  database. The file is a Python pickle, so only open files you trust.

## Running the tests

```
pip install .[test]
pytest
```