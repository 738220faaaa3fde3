from __future__ import annotations

import logging
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)


def parse_ipv4_addrs(text: str, *, limit: int = 12) -> List[str]:
    """Turn `ip -4 addr show` output into 'address  interface' lines."""

    lines: List[str] = []
    for raw in text.splitlines():
        fields = raw.split()
        if not fields or fields[0] != "inet" or len(fields) < 2:
            continue
        lines.append(f"{fields[1]}  {fields[-1]}")
        if len(lines) >= limit:
            break
    return lines


def ipv4_summary(*, limit: int = 12) -> List[str]:
    """Best-effort IPv4 summary."""

    try:
        r = run_cmd(["ip", "-4", "addr", "show"], check=False)
    except Exception:
        return []
    if r.returncode != 0:
        return []
    return parse_ipv4_addrs(r.output, limit=limit)
