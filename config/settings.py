"""
Build settings loaded from config/build_config.yaml.

The config path can be overridden with DEFI_ADAPTERS_BUILD_CONFIG or the
--config CLI flag.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from metadata.writer import Formatter, command_formatter

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = REPO_ROOT / "config" / "build_config.yaml"
CONFIG_ENV_VAR = "DEFI_ADAPTERS_BUILD_CONFIG"


@dataclass
class BuildSettings:
    metadata_root: Path = REPO_ROOT
    registry_file: Path = REPO_ROOT / "metadata" / "adapter_metadata.py"
    provider_env_prefix: str = "DEFI_ADAPTERS_PROVIDER_"
    use_public_rpcs: bool = False
    formatters: Dict[str, List[str]] = field(default_factory=dict)

    def formatter(self) -> Optional[Formatter]:
        if not self.formatters:
            return None
        return command_formatter(self.formatters)


def _resolve(path_value: str, base: Path) -> Path:
    path = Path(path_value)
    if path.is_absolute():
        return path
    return base / path


def load_build_settings(path: Optional[Union[str, Path]] = None, base: Path = REPO_ROOT) -> BuildSettings:
    """Read the YAML build config; missing keys keep their defaults."""
    cfg_path = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG)
    with open(cfg_path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Build config {cfg_path} must be a mapping")

    defaults = BuildSettings()
    formatters = cfg.get("formatters") or {}
    return BuildSettings(
        metadata_root=_resolve(cfg.get("metadata_root", "."), base),
        registry_file=_resolve(cfg.get("registry_file", "metadata/adapter_metadata.py"), base),
        provider_env_prefix=str(cfg.get("provider_env_prefix", defaults.provider_env_prefix)),
        use_public_rpcs=bool(cfg.get("use_public_rpcs", defaults.use_public_rpcs)),
        formatters={str(suffix): [str(part) for part in argv] for suffix, argv in formatters.items()},
    )
