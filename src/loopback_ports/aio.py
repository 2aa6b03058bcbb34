"""Awaitable versions of the probe, scan and resolve helpers.

Each probe runs in the loop's default executor and is awaited before the next
one starts, so at most one port is held at a time. There is no timeout; wrap
calls in asyncio.wait_for if a deadline is needed.
"""

from __future__ import annotations

import asyncio

from .probe import is_port_available
from .resolve import PortResolution, resolution_for
from .scan import NO_PORT, SCAN_WINDOW, scan_range


async def is_port_available_async(port: int) -> bool:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, is_port_available, port)


async def find_available_port_async(start: int, max_attempts: int = SCAN_WINDOW) -> int:
    """Async find_available_port: first free port from start, or NO_PORT."""
    for port in scan_range(start, max_attempts):
        if await is_port_available_async(port):
            return port
    return NO_PORT


async def get_available_port_async(preferred: int, auto_switch: bool = True) -> PortResolution:
    """Async get_available_port."""
    if await is_port_available_async(preferred):
        return resolution_for(preferred, auto_switch, True, None)
    found = await find_available_port_async(preferred + 1, SCAN_WINDOW) if auto_switch else None
    return resolution_for(preferred, auto_switch, False, found)
