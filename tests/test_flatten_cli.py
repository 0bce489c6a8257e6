from pathlib import Path

import pytest

import flatten_cli


def test_example_scenario_delete(tree, capsys):
    root = tree({"a/x.txt": "x", "a/b/y.txt": "y", "z.txt": "z"})

    rc = flatten_cli.main([str(root), "--delete"])

    assert rc == 0
    assert sorted(p.name for p in root.iterdir()) == ["x.txt", "y.txt", "z.txt"]
    assert "Done! Flattened 2 file(s)" in capsys.readouterr().err


def test_example_scenario_rename_copy(tree):
    root = tree({"a/dup.txt": "a", "b/dup.txt": "b"})

    rc = flatten_cli.main([str(root), "-r"])

    assert rc == 0
    assert {(root / "dup.txt").read_text(), (root / "dup_1.txt").read_text()} == {"a", "b"}
    assert (root / "a" / "dup.txt").exists()
    assert (root / "b" / "dup.txt").exists()


def test_defaults_to_current_directory(tree, monkeypatch):
    root = tree({"a/x.txt": "x"})
    monkeypatch.chdir(root)

    assert flatten_cli.main([]) == 0
    assert (root / "x.txt").exists()
    assert (root / "a" / "x.txt").exists()


def test_skip_is_reported_but_not_fatal(tree, capsys):
    root = tree({"a/dup.txt": "a", "b/dup.txt": "b"})

    rc = flatten_cli.main([str(root)])

    err = capsys.readouterr().err
    assert rc == 0
    assert "WARNING" in err
    assert "1 skipped" in err


def test_cleanup_failure_exits_non_zero(tree, capsys):
    root = tree({"a/dup.txt": "a", "b/dup.txt": "b"})

    rc = flatten_cli.main([str(root), "-d"])

    err = capsys.readouterr().err
    assert rc == 1
    assert f"Error: Failed to remove directory {root / 'b'}" in err


def test_missing_target_exits_non_zero(tmp_path, capsys):
    rc = flatten_cli.main([str(tmp_path / "nope")])

    assert rc == 1
    assert "does not exist" in capsys.readouterr().err


def test_dry_run_flag(tree, capsys):
    root = tree({"a/x.txt": "x"})

    rc = flatten_cli.main([str(root), "-d", "-n"])

    assert rc == 0
    assert not (root / "x.txt").exists()
    assert (root / "a" / "x.txt").exists()
    assert "Would flatten 1 file(s)" in capsys.readouterr().err


def test_verbose_logs_each_copy(tree, capsys):
    root = tree({"a/x.txt": "x"})

    flatten_cli.main([str(root), "-v"])

    assert "Copied:" in capsys.readouterr().err


def test_quiet_log_level_hides_info(tree, capsys):
    root = tree({"a/x.txt": "x"})

    flatten_cli.main([str(root), "--log-level", "warning"])

    assert capsys.readouterr().err == ""


def test_log_dir_writes_log_file(tree, tmp_path):
    root = tree({"a/x.txt": "x"})
    log_dir = tmp_path / "logs"

    flatten_cli.main([str(root), "--log-dir", str(log_dir)])

    logs = list(Path(log_dir).glob("flatten_*.log"))
    assert len(logs) == 1


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        flatten_cli.main(["--version"])
    assert excinfo.value.code == 0
    assert "flatten-directory" in capsys.readouterr().out


def test_unknown_flag_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        flatten_cli.main(["--bogus"])
    assert excinfo.value.code == 2


def test_unusable_log_dir_exits_non_zero(tree, tmp_path, capsys):
    root = tree({"a/x.txt": "x"})
    not_a_dir = tmp_path / "logs.txt"
    not_a_dir.write_text("")

    rc = flatten_cli.main([str(root), "--log-dir", str(not_a_dir)])

    assert rc == 1
    assert "Error: Could not set up logging" in capsys.readouterr().err
    assert not (root / "x.txt").exists()
