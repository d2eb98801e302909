import io

from tinysqldb.cli import main
from tinysqldb.database import open_database


def _run(monkeypatch, tmp_path, script):
    monkeypatch.setattr("sys.stdin", io.StringIO(script))
    return main([str(tmp_path / "testdb")])


def test_runs_statements_and_prints_results(monkeypatch, tmp_path, capsys):
    script = "CREATE TABLE users (id INT, name VARCHAR)\nINSERT INTO users (id, name) VALUES (1, 'Alice')\nSELECT * FROM users\n"
    assert _run(monkeypatch, tmp_path, script) == 0
    out = capsys.readouterr().out
    assert "Table users created" in out
    assert "1 row inserted" in out
    assert '"name": "Alice"' in out
    assert "users" in open_database(str(tmp_path / "testdb")).tables


def test_exit_stops_processing(monkeypatch, tmp_path, capsys):
    script = "CREATE TABLE users (id INT)\n\n   \nexit\nDROP TABLE users\n"
    assert _run(monkeypatch, tmp_path, script) == 0
    out = capsys.readouterr().out
    assert "Table users dropped" not in out
    assert "users" in open_database(str(tmp_path / "testdb")).all_tables()


def test_errors_are_reported_and_loop_continues(monkeypatch, tmp_path, capsys):
    script = "SHOW TABLES\nCREATE TABLE t (x INT)\n"
    assert _run(monkeypatch, tmp_path, script) == 0
    out = capsys.readouterr().out
    assert "Error: unsupported SQL command" in out
    assert "Table t created" in out
    assert out.index("Error:") < out.index("Table t created")


def test_end_of_input_prints_exit(monkeypatch, tmp_path, capsys):
    assert _run(monkeypatch, tmp_path, "") == 0
    out = capsys.readouterr().out
    assert out.endswith("exit\n")
    assert (tmp_path / "testdb.db").exists()