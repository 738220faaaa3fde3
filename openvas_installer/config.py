from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .classifier import DEFAULT_FAILURE_PATTERNS
from .lib.env import PATHS
from .lib.selinux import DISABLE_KERNEL_ARG

logger = logging.getLogger(__name__)

SECTIONS = ("paths", "atomic", "packages", "setup", "feeds", "selinux")

ATOMIC_INSTALLER_URL = "https://updates.atomicorp.com/installers/atomic"

BASE_PACKAGES = [
    "wget", "curl", "gnupg2", "gcc", "gcc-c++", "make", "cmake",
    "glib2", "glib2-devel", "libxml2", "libxml2-devel", "libpcap", "libpcap-devel",
    "libgcrypt", "libgcrypt-devel", "libssh", "libssh-devel", "gnutls", "gnutls-devel",
    "redis", "postgresql-server", "postgresql", "python3", "python3-pip",
    "openssl-devel", "systemd-devel", "nano", "grubby",
]


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def state_path(self) -> str:
        return str(self._section("paths").get("state") or PATHS.state_default)

    @property
    def log_path(self) -> str:
        return str(self._section("paths").get("log") or PATHS.log_default)

    @property
    def log_alias(self) -> Optional[str]:
        paths = self._section("paths")
        if "log_alias" in paths and not paths["log_alias"]:
            return None
        return str(paths.get("log_alias") or PATHS.log_alias)

    @property
    def installer_path(self) -> str:
        return str(self._section("paths").get("installer") or PATHS.installer)

    @property
    def selinux_config(self) -> str:
        return str(self._section("paths").get("selinux_config") or PATHS.selinux_config)

    @property
    def installer_url(self) -> str:
        return str(self._section("atomic").get("installer_url") or ATOMIC_INSTALLER_URL)

    @property
    def base_packages(self) -> List[str]:
        return list(self._section("packages").get("base") or BASE_PACKAGES)

    @property
    def product_package(self) -> str:
        return str(self._section("packages").get("product") or "openvas")

    @property
    def setup_command(self) -> List[str]:
        return _argv(self._section("setup").get("command"), ["openvas-setup"])

    @property
    def feed_sync_command(self) -> List[str]:
        return _argv(self._section("feeds").get("command"), ["greenbone-feed-sync", "--all"])

    @property
    def failure_patterns(self) -> List[str]:
        patterns = self._section("selinux").get("failure_patterns")
        if isinstance(patterns, str):
            patterns = [patterns]
        return list(patterns or DEFAULT_FAILURE_PATTERNS)

    @property
    def kernel_arg(self) -> str:
        return str(self._section("selinux").get("kernel_arg") or DISABLE_KERNEL_ARG)


def _argv(value: Any, default: List[str]) -> List[str]:
    if not value:
        return list(default)
    if isinstance(value, str):
        return value.split()
    return [str(v) for v in value]


def load_installer_config(path: Optional[str]) -> InstallerConfig:
    """Load YAML config; a missing file means defaults."""

    if not path:
        return InstallerConfig()
    p = Path(path)
    if not p.exists():
        logger.debug("No config at %s; using defaults", path)
        return InstallerConfig()

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    import yaml

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    for name in SECTIONS:
        section = raw.get(name)
        if section is not None and not isinstance(section, dict):
            raise ValueError(f"{path}: '{name}' must be a mapping, got {type(section).__name__}")

    return InstallerConfig(raw=raw)
