"""Sequential scan for the first free loopback port in a range."""

from __future__ import annotations

from .probe import is_port_available

# Window used by the scan default and by preferred-port resolution.
SCAN_WINDOW = 50
NO_PORT = -1


def scan_range(start: int, max_attempts: int) -> range:
    """Ports probed by a scan: start, start+1, ... start+max_attempts-1."""
    return range(start, start + max(max_attempts, 0))


def find_available_port(start: int, max_attempts: int = SCAN_WINDOW) -> int:
    """
    Probe start, start+1, ... in ascending order, one at a time.
    Returns the first available port, or NO_PORT (-1) if none in the range is free.
    """
    for port in scan_range(start, max_attempts):
        if is_port_available(port):
            return port
    return NO_PORT
