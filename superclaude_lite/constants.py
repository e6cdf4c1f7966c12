from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

REPO_URL = "https://github.com/SuperClaude-Org/SuperClaude_Framework.git"
FIXED_COMMIT = "13aa2ec"
BRANCH = "master"

BACKUP_DIR_PREFIX = ".superclaude-backup"


@dataclass(frozen=True)
class Layout:
    # Names inside the target directory.
    superclaude_dir: str = ".superclaude"
    claude_dir: str = ".claude"
    mcp_config_file: str = ".mcp.json"
    claude_file: str = "CLAUDE.md"
    commands_dir: str = "Commands"
    command_link: str = "sc"

    # Paths inside the cloned framework repository.
    core_source: str = "SuperClaude/Core"
    commands_source: str = "SuperClaude/Commands"


LAYOUT = Layout()

IMPORT_MARKER = "@./.superclaude/CLAUDE.md"

SUPERCLAUDE_IMPORT = (
    "## SuperClaude Instructions\n"
    "\n"
    "**Import SuperClaude Core, treat as if import is in the main CLAUDE.md file.**\n"
    f"{IMPORT_MARKER}"
)

# Core files the framework must ship; checked after copying.
EXPECTED_CORE_FILES = ("CLAUDE.md", "COMMANDS.md", "FLAGS.md", "PRINCIPLES.md", "RULES.md")

RECOMMENDED_MCP_SERVERS: Dict[str, Dict[str, Any]] = {
    "sequential-thinking": {
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-sequential-thinking"],
    },
    "context7": {
        "command": "npx",
        "args": ["-y", "@upstash/context7-mcp@latest"],
    },
    "serena": {
        "command": "uvx",
        "args": ["--from", "git+https://github.com/oraios/serena", "serena", "start-mcp-server"],
    },
    "playwright": {
        "command": "npx",
        "args": ["@playwright/mcp@latest"],
    },
}
