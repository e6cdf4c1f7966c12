from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
import time
from pathlib import Path
from typing import Optional

from . import __version__
from .constants import LAYOUT
from .context import BackupManager, ExecutionContext
from .errors import InstallerError
from .install_config import InstallConfig, load_install_config
from .lib import git
from .lib.files import path_exists
from .lib.merge import remove_claude_import
from .logging_utils import configure_logging
from .orchestrator import Orchestrator, new_installer

logger = logging.getLogger(__name__)


def _target_dir(path: Optional[str]) -> str:
    return str(Path(path or os.getcwd()).expanduser().absolute())


def _discard_clone(ctx: ExecutionContext) -> None:
    """Remove the temporary clone left behind when a run aborts before CleanupTempFiles."""
    if not ctx.temp_dir or not path_exists(ctx.temp_dir):
        return
    try:
        git.cleanup_temp_dir(ctx.temp_dir)
    except OSError as e:
        logger.warning("Could not remove temp directory %s: %s", ctx.temp_dir, e)
        return
    ctx.temp_dir = None


def cmd_init(args: argparse.Namespace) -> int:
    target = _target_dir(args.directory or args.path)

    config = load_install_config(args.config) if args.config else InstallConfig()
    config = config.merged(
        no_backup=args.no_backup,
        add_recommended_mcp=args.add_mcp,
        backup_dir=args.backup_dir,
        dry_run=args.dry_run,
    )

    installer = new_installer(target, config)
    print(f"Installing SuperClaude Framework to: {target}")
    if config.dry_run:
        print("[DRY RUN] No files will be modified")

    start = time.monotonic()
    try:
        installer.run()
    except InstallerError:
        _discard_clone(installer.context)
        manager = installer.context.backup_manager
        if manager is not None and manager.files:
            print(
                f"Backups of the original files are in {manager.backup_dir}; "
                f"restore them with: superclaude-lite rollback --backup-dir {manager.backup_dir} --path {target}",
                file=sys.stderr,
            )
        raise
    duration = time.monotonic() - start

    if config.dry_run:
        print(f"\n[DRY RUN] Installation simulation completed in {duration:.2f}s")
    else:
        print(installer.get_summary().render())
        print(f"\nInstallation completed in {duration:.2f}s")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    target = _target_dir(args.directory)
    print(f"Checking SuperClaude installation status in: {target}\n")

    required = [
        (LAYOUT.superclaude_dir, "Framework directory"),
        (LAYOUT.claude_file, "Main configuration"),
        (LAYOUT.claude_dir, "Claude directory"),
    ]
    for rel, description in required:
        path = Path(target) / rel
        mark = "ok" if path.exists() else "missing"
        print(f"[{mark}] {description}: {path}")

    print("\nOptional files:")
    mcp = Path(target) / LAYOUT.mcp_config_file
    if mcp.exists():
        print(f"[ok] MCP configuration: {mcp}")
    else:
        print(f"[--] MCP configuration: {mcp} (optional - use --add-mcp to create)")

    installed = (Path(target) / LAYOUT.superclaude_dir).is_dir()
    if installed:
        print("\nStatus: SuperClaude is installed")
    else:
        print("\nStatus: SuperClaude is not installed")
        print("\nTo install, run: superclaude-lite init")
    return 0 if installed else 1


def cmd_clean(args: argparse.Namespace) -> int:
    target = _target_dir(args.directory)

    if not args.force:
        print(f"This will remove SuperClaude framework files from: {target}")
        print("Files to be removed:")
        print(f"  - {LAYOUT.superclaude_dir}/ (entire directory)")
        print(f"  - SuperClaude import from {LAYOUT.claude_file} (if present)")
        answer = input("\nContinue? (y/N): ").strip()
        if answer not in {"y", "Y"}:
            print("Cancelled.")
            return 0

    link = Path(target) / LAYOUT.claude_dir / "commands" / LAYOUT.command_link
    if link.is_symlink():
        link.unlink()
        logger.info("Removed %s", link)

    framework = Path(target) / LAYOUT.superclaude_dir
    if path_exists(framework):
        shutil.rmtree(framework)
        logger.info("Removed %s", framework)

    if remove_claude_import(Path(target) / LAYOUT.claude_file):
        logger.info("Removed SuperClaude import from %s", LAYOUT.claude_file)

    print("Removed SuperClaude framework files")
    return 0


def cmd_rollback(args: argparse.Namespace) -> int:
    target = _target_dir(args.path)
    manager = BackupManager.from_backup_dir(args.backup_dir, target)

    ctx = ExecutionContext(
        target_dir=target,
        config=InstallConfig(backup_dir=args.backup_dir),
        backup_dir=manager.backup_dir,
        backup_manager=manager,
    )
    print(f"Rolling back from backup: {manager.backup_dir}")
    for path in Orchestrator(ctx).rollback():
        print(f"Restored: {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="superclaude-lite",
        description="Lightweight installer for the SuperClaude Framework (project dir instead of home dir).",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--log", default=None, help="Also write the installer log to this file")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = p.add_subparsers(dest="subcmd", required=True)

    sp = sub.add_parser("init", help="Install SuperClaude framework in a directory")
    sp.add_argument("directory", nargs="?", default=None, help="Target directory (default: current directory)")
    sp.add_argument("-p", "--path", default=None, help="Target directory (same as the positional argument)")
    # None means "not given" so config-file values survive.
    sp.add_argument("--no-backup", action="store_true", default=None, help="Skip backups of existing files")
    sp.add_argument("--add-mcp", action="store_true", default=None, help="Add recommended MCP servers to .mcp.json")
    sp.add_argument("-b", "--backup-dir", default=None, help="Custom backup directory")
    sp.add_argument("--dry-run", action="store_true", default=None, help="Show what would be done without changes")
    sp.add_argument("--config", default=None, help="YAML install config")
    sp.set_defaults(func=cmd_init)

    sp = sub.add_parser("status", help="Check SuperClaude installation status")
    sp.add_argument("directory", nargs="?", default=None)
    sp.set_defaults(func=cmd_status)

    sp = sub.add_parser("clean", help="Remove SuperClaude framework files")
    sp.add_argument("directory", nargs="?", default=None)
    sp.add_argument("-f", "--force", action="store_true", help="Remove without confirmation")
    sp.set_defaults(func=cmd_clean)

    sp = sub.add_parser("rollback", help="Restore files from a backup directory")
    sp.add_argument("-b", "--backup-dir", required=True, help="Backup directory to restore from")
    sp.add_argument("-p", "--path", default=None, help="Directory the backup was taken from (default: cwd)")
    sp.set_defaults(func=cmd_rollback)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        return int(args.func(args))
    except (InstallerError, ValueError, OSError) as e:
        logger.debug("Command %s failed", args.subcmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
