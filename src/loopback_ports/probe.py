"""Probe whether a TCP port can be bound on the loopback interface."""

from __future__ import annotations

import logging
import os
import socket

LOOPBACK_HOST = "127.0.0.1"

logger = logging.getLogger(__name__)


def is_port_available(port: int) -> bool:
    """
    Return True if a listening socket can be bound to 127.0.0.1:port.

    The socket is closed before returning, so the port is only held for the
    duration of the check. Any bind error (in use, permission denied, port out
    of range) is reported as False.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if os.name != "nt":
                # SO_REUSEADDR means "steal the port" on Windows.
                s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((LOOPBACK_HOST, port))
            s.listen()
    except (OSError, OverflowError) as e:
        logger.debug("port %s unavailable: %s", port, e)
        return False
    logger.debug("port %s available", port)
    return True
