"""Interactive shell for running SQL statements against a database file."""

from __future__ import annotations

import argparse
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from tinysqldb.column import DatabaseError
from tinysqldb.database import open_database

PROMPT = "sql> "
DEFAULT_DATABASE = "testdb"
DEFAULT_HISTORY = str(Path(tempfile.gettempdir()) / "sql_history.tmp")


@contextmanager
def _history(path: str) -> Iterator[None]:
    """Keep line-editing history between sessions when running on a terminal."""
    if not sys.stdin.isatty():
        yield
        return
    try:
        import readline
    except ImportError:
        yield
        return
    try:
        readline.read_history_file(path)
    except OSError:
        pass
    try:
        yield
    finally:
        try:
            readline.write_history_file(path)
        except OSError:
            pass


def _lines(prompt: str) -> Iterator[str]:
    while True:
        try:
            line = input(prompt)
        except EOFError:
            print("exit")
            return
        except KeyboardInterrupt:
            print("^C")
            return
        yield line


def main(argv: Sequence[str] | None = None) -> int:
    """Run the shell until ``exit``, end of input or an interrupt."""
    parser = argparse.ArgumentParser(prog="tinysqldb", description="Interactive SQL shell.")
    parser.add_argument("database", nargs="?", default=DEFAULT_DATABASE, help="database name")
    parser.add_argument("--history", default=DEFAULT_HISTORY, help="history file")
    args = parser.parse_args(argv)

    print("Simple SQL Database")
    try:
        db = open_database(args.database)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    with _history(args.history):
        for line in _lines(PROMPT):
            sql = line.strip()
            if not sql:
                continue
            if sql == "exit":
                break
            try:
                print(db.execute(sql))
            except (DatabaseError, OSError) as exc:
                print("Error:", exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())