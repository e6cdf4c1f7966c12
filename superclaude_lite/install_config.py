from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class InstallConfig:
    no_backup: bool = False
    # Gates MergeOrCreateMCPConfig and its conditional dependency edges.
    add_recommended_mcp: bool = False
    backup_dir: Optional[str] = None
    dry_run: bool = False

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> "InstallConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"Unknown install config keys: {', '.join(unknown)}")

        backup_dir = raw.get("backup_dir")
        return cls(
            no_backup=bool(raw.get("no_backup", False)),
            add_recommended_mcp=bool(raw.get("add_recommended_mcp", False)),
            backup_dir=str(backup_dir) if backup_dir else None,
            dry_run=bool(raw.get("dry_run", False)),
        )

    def merged(self, **overrides: Any) -> "InstallConfig":
        """Return a copy with every override that is not None applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_install_config(path: str) -> InstallConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"install config not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("install config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the install config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{p.name} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{p.name} must contain a mapping/object")

    return InstallConfig.from_mapping(raw)
