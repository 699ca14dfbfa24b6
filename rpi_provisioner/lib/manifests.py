from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional


def _manifest_dir() -> Path:
    # rpi_provisioner/lib/manifests.py -> rpi_provisioner/manifests
    return Path(__file__).resolve().parents[1] / "manifests"


def load_yaml(path: Path) -> Dict[str, Any]:
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML required to load manifests") from e

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping/dict: {path}")
    return data


def load_groups_manifest(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the static group definitions (package lists, repositories, services)."""
    p = Path(path) if path else _manifest_dir() / "groups.yaml"
    data = load_yaml(p)
    groups = data.get("groups")
    if not isinstance(groups, dict):
        raise ValueError(f"{p}: groups must be a mapping")
    return groups
