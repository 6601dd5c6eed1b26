"""Music Player Daemon now-playing provider."""

from __future__ import annotations

import asyncio

from wledticker.data.base import ProviderError, TextProvider

DEFAULT_PORT = 6600


class MPDError(ProviderError):
    """Raised when MPD is unreachable or answers a command with ACK."""


class MPDClient:
    """Minimal MPD text-protocol client: one connection per query."""

    def __init__(self, host: str = "localhost", port: int = DEFAULT_PORT, timeout_seconds: float = 5) -> None:
        self._host = host
        self._port = port
        self._timeout_seconds = timeout_seconds

    async def query(self, *commands: str) -> list[dict[str, str]]:
        """Run commands in order and return one key/value mapping per command."""
        try:
            return await asyncio.wait_for(self._query(commands), self._timeout_seconds)
        except (OSError, asyncio.TimeoutError) as exc:
            raise MPDError(f"MPD request to {self._host}:{self._port} failed: {exc!r}") from exc

    async def _query(self, commands: tuple[str, ...]) -> list[dict[str, str]]:
        reader, writer = await asyncio.open_connection(self._host, self._port)
        try:
            greeting = (await reader.readline()).decode("utf-8", "replace")
            if not greeting.startswith("OK MPD"):
                raise MPDError(f"Unexpected MPD greeting: {greeting.strip()!r}")

            results = []
            for command in commands:
                writer.write(f"{command}\n".encode("utf-8"))
                await writer.drain()
                results.append(await self._read_response(reader))
            writer.write(b"close\n")
            await writer.drain()
            return results
        finally:
            writer.close()
            await writer.wait_closed()

    @staticmethod
    async def _read_response(reader: asyncio.StreamReader) -> dict[str, str]:
        fields: dict[str, str] = {}
        while True:
            raw = await reader.readline()
            if not raw:
                raise MPDError("MPD closed the connection mid-response")
            line = raw.decode("utf-8", "replace").rstrip("\n")
            if line == "OK":
                return fields
            if line.startswith("ACK"):
                raise MPDError(f"MPD error: {line}")
            key, sep, value = line.partition(": ")
            if sep:
                fields.setdefault(key, value)


def format_now_playing(status: dict[str, str], song: dict[str, str]) -> str:
    """Text for the player state; empty when nothing is playing."""
    state = status.get("state", "stop")
    if state == "stop":
        return ""

    title = song.get("Title") or song.get("Name") or song.get("file", "")
    artist = song.get("Artist", "")
    text = f"{artist} - {title}" if artist and title else (title or artist)
    if state == "pause":
        return f"PAUSED {text}".strip()
    return text


class MPDProvider(TextProvider):
    """Current artist and title from MPD."""

    def __init__(self, provider_id: str, client: MPDClient | None = None) -> None:
        super().__init__(provider_id)
        self._client = client or MPDClient()

    async def get_text(self) -> str:
        status, song = await self._client.query("status", "currentsong")
        return format_now_playing(status, song)


__all__ = ["MPDClient", "MPDError", "MPDProvider", "format_now_playing"]
