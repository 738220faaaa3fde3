from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    state_default: str = "/var/lib/openvas-installer/state.json"
    log_default: str = "/var/log/openvas-install.log"
    log_alias: str = "/var/log/openvas_vm_build.log"
    installer: str = "/tmp/atomic-installer.sh"
    config_default: str = "/etc/openvas-installer.yaml"
    selinux_config: str = "/etc/selinux/config"


PATHS = Paths()
