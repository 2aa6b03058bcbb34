"""Pick the port to serve on: the preferred one, or the next free one after it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .probe import is_port_available
from .scan import NO_PORT, SCAN_WINDOW, find_available_port

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortResolution:
    """Outcome of resolving a preferred port.

    port is NO_PORT (-1) when nothing usable was found. Branch on ``ok`` (or the
    port), not on ``message``, which is informational only.
    """

    port: int
    switched: bool = False
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.port != NO_PORT

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"port": self.port, "switched": self.switched}
        if self.message is not None:
            data["message"] = self.message
        return data


def in_use_message(preferred: int) -> str:
    return (
        f"Port {preferred} is already in use. Please specify a different port "
        "in the configuration or enable auto port switching."
    )


def switched_message(preferred: int, port: int) -> str:
    return f"Port {preferred} is in use, automatically switched to port {port}."


def exhausted_message(preferred: int) -> str:
    return (
        f"Port {preferred} is in use and no available ports found in range "
        f"{preferred + 1}-{preferred + SCAN_WINDOW}."
    )


def resolution_for(preferred: int, auto_switch: bool, preferred_free: bool, found: int | None) -> PortResolution:
    """
    Build the result once the probes are done.

    ``found`` is the scan result from preferred+1, or None when no scan ran.
    Shared by the blocking and async resolvers so both report identically.
    """
    if preferred_free:
        return PortResolution(port=preferred)
    if not auto_switch:
        logger.warning("port %s in use and auto switching is disabled", preferred)
        return PortResolution(port=NO_PORT, message=in_use_message(preferred))
    if found is None or found == NO_PORT:
        logger.warning(
            "port %s in use, nothing free in %s-%s", preferred, preferred + 1, preferred + SCAN_WINDOW
        )
        return PortResolution(port=NO_PORT, message=exhausted_message(preferred))
    logger.info("port %s in use, switched to %s", preferred, found)
    return PortResolution(port=found, switched=True, message=switched_message(preferred, found))


def get_available_port(preferred: int, auto_switch: bool = True) -> PortResolution:
    """
    Check ``preferred``; if it is busy and ``auto_switch`` is set, scan the
    SCAN_WINDOW ports after it. See PortResolution for the result.
    """
    if is_port_available(preferred):
        return resolution_for(preferred, auto_switch, True, None)
    found = find_available_port(preferred + 1, SCAN_WINDOW) if auto_switch else None
    return resolution_for(preferred, auto_switch, False, found)
