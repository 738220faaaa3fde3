"""Atomicorp OpenVAS installer (state-driven, resumable).

Core design goals:
- Phase persisted before every transition and before reboot
- Resume from the persisted phase only
- SELinux disable + reboot as an operator-confirmed remediation
- Centralized logging; command output teed into the same log
"""

__all__ = []
