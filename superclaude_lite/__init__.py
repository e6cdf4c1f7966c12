"""SuperClaude Lite installer (project-local, dependency-ordered).

Core design goals:
- Steps ordered by declared dependencies, not by list position
- Fail-fast execution with the failing step and phase named
- Backups of pre-existing files with rollback
- Dry-run that walks the same order without touching the filesystem
- Centralized logging
"""

__version__ = "0.2.0"

__all__ = ["__version__"]
