from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

DEFAULT_CONFIG_PATH = "/etc/rpi-provisioner.yaml"
CONFIG_ENV_VAR = "RPI_PROVISIONER_CONFIG"
DEFAULT_LOG_PATH = "/tmp/raspberry-pi-setup.log"


@dataclass(frozen=True)
class SetupConfig:
    log_path: str = DEFAULT_LOG_PATH
    # None means the manifest shipped inside the package.
    manifest_path: Optional[str] = None
    wifi_country: str = "AU"
    min_free_kb: int = 2 * 1024 * 1024
    probe_attempts: int = 5
    probe_interval: float = 2.0
    network_hosts: Tuple[str, ...] = ("8.8.8.8", "1.1.1.1", "google.com")
    ping_timeout: int = 5
    required_commands: Tuple[str, ...] = ("curl", "wget", "sudo", "systemctl")
    use_sudo: bool = True
    keyring_dir: str = "/etc/apt/keyrings"
    sources_dir: str = "/etc/apt/sources.list.d"
    reboot_delay: float = 5.0
    model_path: str = "/proc/device-tree/model"

    def privileged(self, argv: list[str]) -> list[str]:
        """Prefix argv with sudo when configured to."""
        if self.use_sudo:
            return ["sudo", *argv]
        return list(argv)


_TUPLE_FIELDS = {"network_hosts", "required_commands"}


def config_path_from_env() -> str:
    return os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH


def load_config(path: Optional[str] = None) -> SetupConfig:
    """Load SetupConfig from an optional YAML file.

    A missing file yields the defaults. Top-level keys override fields of the
    same name; unknown keys are an error.
    """

    p = Path(path or config_path_from_env())
    if not p.exists():
        return SetupConfig()

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read the provisioner config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{p} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping/object")

    known = {f.name for f in dataclasses.fields(SetupConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {p}: {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key in _TUPLE_FIELDS:
            if not isinstance(value, list):
                raise ValueError(f"config.{key} must be a list of strings")
            value = tuple(str(v) for v in value)
        values[key] = value
    return SetupConfig(**values)
