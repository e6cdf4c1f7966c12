"""CLAUDE.md and .mcp.json create/merge helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from ..constants import IMPORT_MARKER, RECOMMENDED_MCP_SERVERS, SUPERCLAUDE_IMPORT

logger = logging.getLogger(__name__)


def create_claude_md(path: str | Path) -> None:
    content = "# Claude Code Instructions\n\n" + SUPERCLAUDE_IMPORT + "\n"
    Path(path).write_text(content, encoding="utf-8")


def merge_claude_md(path: str | Path) -> bool:
    """Append the import section unless present. Returns True if the file changed."""
    p = Path(path)
    content = p.read_text(encoding="utf-8")
    if IMPORT_MARKER in content:
        logger.info("%s already imports SuperClaude", p)
        return False

    p.write_text(content + "\n\n" + SUPERCLAUDE_IMPORT + "\n", encoding="utf-8")
    return True


def remove_claude_import(path: str | Path) -> bool:
    """Strip the import section written by :func:`merge_claude_md`. Returns True if removed."""
    p = Path(path)
    if not p.exists():
        return False

    content = p.read_text(encoding="utf-8")
    if SUPERCLAUDE_IMPORT not in content:
        return False

    stripped = content.replace("\n\n" + SUPERCLAUDE_IMPORT + "\n", "\n")
    stripped = stripped.replace(SUPERCLAUDE_IMPORT, "").rstrip("\n") + "\n"
    p.write_text(stripped, encoding="utf-8")
    return True


def _dump(config: Mapping[str, Any]) -> str:
    return json.dumps(config, indent=4) + "\n"


def create_mcp_config(path: str | Path, servers: Mapping[str, Any] = RECOMMENDED_MCP_SERVERS) -> None:
    Path(path).write_text(_dump({"mcpServers": dict(servers)}), encoding="utf-8")


def merge_mcp_config(path: str | Path, servers: Mapping[str, Any] = RECOMMENDED_MCP_SERVERS) -> list[str]:
    """Add missing servers to an existing .mcp.json; existing entries win.

    Returns the names that were added.
    """
    p = Path(path)
    try:
        existing = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"failed to parse existing {p.name}: {e}") from e
    if not isinstance(existing, dict):
        raise ValueError(f"{p.name} must contain a JSON object")

    current: Dict[str, Any] = existing.setdefault("mcpServers", {})
    if not isinstance(current, dict):
        raise ValueError(f"{p.name}: mcpServers must be an object")

    added = [name for name in servers if name not in current]
    for name in added:
        current[name] = servers[name]

    p.write_text(_dump(existing), encoding="utf-8")
    return added
