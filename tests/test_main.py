from __future__ import annotations

import logging
from pathlib import Path

from superclaude_lite import main as cli
from superclaude_lite.constants import IMPORT_MARKER
from superclaude_lite.lib import git


def test_init_installs_and_prints_summary(target, fake_git, capsys):
    assert cli.main(["init", str(target), "--no-backup"]) == 0

    out = capsys.readouterr().out
    assert "installation completed successfully" in out
    assert "CLAUDE.md (created)" in out
    assert (target / ".superclaude" / "CLAUDE.md").exists()


def test_init_dry_run_reports_simulation(target, fake_git, capsys):
    assert cli.main(["init", "--path", str(target), "--dry-run", "--add-mcp"]) == 0
    assert "[DRY RUN] Installation simulation completed" in capsys.readouterr().out
    assert list(target.iterdir()) == []


def test_init_reads_yaml_config(target, fake_git, tmp_path):
    cfg = tmp_path / "install.yaml"
    cfg.write_text("add_recommended_mcp: true\nno_backup: true\n")

    assert cli.main(["init", str(target), "--config", str(cfg)]) == 0
    assert (target / ".mcp.json").exists()


def test_init_failure_prints_error_and_rollback_hint(target, fake_git, monkeypatch, capsys):
    (target / "CLAUDE.md").write_text("# Mine\n")

    def broken_copy(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("superclaude_lite.steps.framework.copy_markdown_files", broken_copy)
    assert cli.main(["init", str(target), "--backup-dir", str(target / "bk")]) == 1

    err = capsys.readouterr().err
    assert "Error: execution failed for step CopyCoreFiles: disk full" in err
    assert "rollback --backup-dir" in err


def test_status(target, fake_git, capsys):
    assert cli.main(["status", str(target)]) == 1
    assert "SuperClaude is not installed" in capsys.readouterr().out

    cli.main(["init", str(target), "--no-backup"])
    capsys.readouterr()
    assert cli.main(["status", str(target)]) == 0
    assert "Status: SuperClaude is installed" in capsys.readouterr().out


def test_clean_removes_framework_and_import(target, fake_git):
    (target / "CLAUDE.md").write_text("# Mine\n")
    cli.main(["init", str(target), "--no-backup"])

    assert cli.main(["clean", str(target), "--force"]) == 0
    assert not (target / ".superclaude").exists()
    assert not (target / ".claude" / "commands" / "sc").is_symlink()
    assert IMPORT_MARKER not in (target / "CLAUDE.md").read_text()


def test_clean_can_be_cancelled(target, fake_git, monkeypatch):
    cli.main(["init", str(target), "--no-backup"])
    monkeypatch.setattr("builtins.input", lambda _prompt: "n")

    assert cli.main(["clean", str(target)]) == 0
    assert (target / ".superclaude").exists()


def test_rollback_command_restores_backup(target, tmp_path, capsys):
    backup = tmp_path / "bk"
    backup.mkdir()
    (backup / "CLAUDE.md").write_text("original\n")
    (target / "CLAUDE.md").write_text("changed\n")

    assert cli.main(["rollback", "--backup-dir", str(backup), "--path", str(target)]) == 0
    assert (target / "CLAUDE.md").read_text() == "original\n"
    assert f"Restored: {target / 'CLAUDE.md'}" in capsys.readouterr().out


def test_rollback_command_with_empty_backup(target, tmp_path, capsys):
    backup = tmp_path / "empty"
    backup.mkdir()

    assert cli.main(["rollback", "--backup-dir", str(backup), "--path", str(target)]) == 1
    assert "no backup available for rollback" in capsys.readouterr().err
    assert list(target.iterdir()) == []


def test_rollback_command_requires_existing_dir(target, tmp_path, capsys):
    missing = tmp_path / "nope"
    assert cli.main(["rollback", "--backup-dir", str(missing), "--path", str(target)]) == 1
    assert f"Error: backup directory does not exist: {missing}" in capsys.readouterr().err


def test_init_with_unknown_config_key_reports_error(target, fake_git, tmp_path, capsys):
    cfg = tmp_path / "install.yaml"
    cfg.write_text("bogus: 1\n")

    assert cli.main(["init", str(target), "--config", str(cfg)]) == 1
    assert "Error: Unknown install config keys: bogus" in capsys.readouterr().err
    assert fake_git == []


def test_init_with_missing_config_file_reports_error(target, fake_git, tmp_path, capsys):
    assert cli.main(["init", str(target), "--config", str(tmp_path / "absent.yaml")]) == 1
    assert "Error: install config not found:" in capsys.readouterr().err
    assert list(target.iterdir()) == []


def test_failed_init_removes_temporary_clone(target, fake_git, tmp_path, monkeypatch, capsys):
    def broken_clone(dest, **_):
        (Path(dest) / "SuperClaude" / "Core").mkdir(parents=True)

    monkeypatch.setattr(git, "clone_repository", broken_clone)

    assert cli.main(["init", str(target), "--no-backup"]) == 1
    assert "commands source directory not found" in capsys.readouterr().err
    assert not (tmp_path / "clone-1").exists()


def test_successful_init_leaves_no_temporary_clone(target, fake_git):
    assert cli.main(["init", str(target), "--no-backup"]) == 0
    assert fake_git and not Path(fake_git[0]).exists()


def test_log_option_writes_log_file(target, tmp_path):
    log = tmp_path / "logs" / "install.log"
    cli.main(["--log", str(log), "-v", "status", str(target)])

    root = logging.getLogger()
    assert getattr(root, "_superclaude_log_path") == str(log)
    assert "Logging initialized" in log.read_text()
