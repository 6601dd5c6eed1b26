"""UDP transmission to a WLED controller."""

from __future__ import annotations

import asyncio
import logging
import socket

logger = logging.getLogger(__name__)

DEFAULT_PORT = 21324


async def resolve_host(host: str) -> str:
    """Resolve a hostname to an IPv4 address, falling back to the name itself."""
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, None, family=socket.AF_INET, type=socket.SOCK_DGRAM)
    except OSError as exc:
        logger.warning("Could not resolve %s (%s); using it as given", host, exc)
        return host
    if not infos:
        return host
    return infos[0][4][0]


class _DatagramProtocol(asyncio.DatagramProtocol):
    def error_received(self, exc: Exception) -> None:
        logger.warning("UDP error from WLED target: %s", exc)

    def connection_lost(self, exc: Exception | None) -> None:
        if exc is not None:
            logger.warning("UDP endpoint closed with error: %s", exc)


class UdpSink:
    """Fire-and-forget datagram sender bound to one host:port."""

    def __init__(self, host: str, port: int = DEFAULT_PORT) -> None:
        self._host = host
        self._port = port
        self._transport: asyncio.DatagramTransport | None = None

    @property
    def address(self) -> tuple[str, int]:
        return self._host, self._port

    async def open(self) -> None:
        """Create the connected datagram endpoint. Socket errors propagate."""
        if self._transport is not None:
            return
        loop = asyncio.get_running_loop()
        transport, _ = await loop.create_datagram_endpoint(
            _DatagramProtocol, remote_addr=(self._host, self._port)
        )
        self._transport = transport

    async def send(self, packet: bytes) -> None:
        if self._transport is None:
            raise RuntimeError("UdpSink.open() must be called before send().")
        try:
            self._transport.sendto(packet)
        except OSError as exc:
            logger.warning("UDP send to %s:%d failed: %s", self._host, self._port, exc)

    def close(self) -> None:
        if self._transport is not None:
            self._transport.close()
            self._transport = None

    async def __aenter__(self) -> UdpSink:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["DEFAULT_PORT", "UdpSink", "resolve_host"]
