"""Shared fixtures: fake busy ports and real listening sockets on 127.0.0.1."""

from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest


class FakePorts:
    """Stand-in for is_port_available: ports in ``busy`` are taken, the rest free."""

    def __init__(self) -> None:
        self.busy: set[int] = set()
        self.probed: list[int] = []

    def __call__(self, port: int) -> bool:
        self.probed.append(port)
        return port not in self.busy


@pytest.fixture
def fake_ports(monkeypatch: pytest.MonkeyPatch) -> FakePorts:
    fake = FakePorts()
    for target in (
        "loopback_ports.scan.is_port_available",
        "loopback_ports.resolve.is_port_available",
        "loopback_ports.aio.is_port_available",
    ):
        monkeypatch.setattr(target, fake)
    return fake


def listen_on(port: int = 0) -> socket.socket:
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        s.bind(("127.0.0.1", port))
        s.listen()
    except OSError:
        s.close()
        raise
    return s


@pytest.fixture
def held_port() -> Iterator[int]:
    """A port with a live listener on 127.0.0.1 for the duration of the test."""
    s = listen_on()
    try:
        yield s.getsockname()[1]
    finally:
        s.close()


@pytest.fixture
def free_port() -> int:
    """A port that was free a moment ago (the OS just handed it out and it was released)."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def _hold_consecutive(count: int, tries: int = 100) -> list[socket.socket]:
    """Listeners on ``count`` consecutive ports, starting from one the OS hands out."""
    for _ in range(tries):
        first = listen_on()
        held = [first]
        base = first.getsockname()[1]
        try:
            for port in range(base + 1, base + count):
                held.append(listen_on(port))
        except (OSError, OverflowError):
            for s in held:
                s.close()
            continue
        return held
    raise RuntimeError(f"could not hold {count} consecutive ports on 127.0.0.1")


@pytest.fixture
def held_range() -> Iterator[list[int]]:
    """Five consecutive ports, all with live listeners, lowest first."""
    sockets = _hold_consecutive(5)
    try:
        yield [s.getsockname()[1] for s in sockets]
    finally:
        for s in sockets:
            s.close()
