"""
Target triple of the running machine, in registry form.

Registry keys look like ``x86_64-linux`` or ``aarch64-macos``: the CPU
architecture, a dash, the OS name.
"""

from __future__ import annotations

import platform

# platform.machine() → registry arch name
_ARCH_MAP = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "arm64": "aarch64",
    "armv8": "aarch64",
}

# platform.system().lower() → registry OS name
_OS_MAP = {
    "darwin": "macos",
}


def normalize_target(machine: str, system: str) -> str:
    arch = machine.lower()
    os_name = system.lower()
    return f"{_ARCH_MAP.get(arch, arch)}-{_OS_MAP.get(os_name, os_name)}"


def current_target() -> str:
    """e.g. ``x86_64-linux`` on a 64-bit Linux box."""
    return normalize_target(platform.machine(), platform.system())
