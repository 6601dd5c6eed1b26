from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from wledticker.data.mpd import MPDClient, MPDError, MPDProvider, format_now_playing

STATUS_PLAYING = "volume: 80\nstate: play\nsong: 3\n"
SONG = "file: music/track.flac\nArtist: Boards of Canada\nTitle: Roygbiv\n"


async def _serve(responses: dict[str, str], greeting: str = "OK MPD 0.23.5\n"):
    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.write(greeting.encode())
        await writer.drain()
        while True:
            line = await reader.readline()
            if not line:
                break
            command = line.decode().strip()
            if command == "close":
                break
            writer.write(responses.get(command, "ACK [5@0] {} unknown command\n").encode())
            await writer.drain()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    return server, port


def _query_fake_server(responses: dict[str, str], *commands: str, greeting: str = "OK MPD 0.23.5\n"):
    async def scenario():
        server, port = await _serve(responses, greeting)
        try:
            return await MPDClient("127.0.0.1", port).query(*commands)
        finally:
            server.close()
            await server.wait_closed()

    return asyncio.run(scenario())


def test_query_parses_key_values() -> None:
    status, song = _query_fake_server(
        {"status": STATUS_PLAYING + "OK\n", "currentsong": SONG + "OK\n"},
        "status",
        "currentsong",
    )

    assert status["state"] == "play"
    assert song["Artist"] == "Boards of Canada"
    assert song["Title"] == "Roygbiv"


def test_ack_raises_mpd_error() -> None:
    with pytest.raises(MPDError):
        _query_fake_server({}, "status")


def test_bad_greeting_raises_mpd_error() -> None:
    with pytest.raises(MPDError):
        _query_fake_server({"status": "OK\n"}, "status", greeting="HELLO\n")


def test_connection_refused_raises_mpd_error() -> None:
    async def scenario():
        server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        server.close()
        await server.wait_closed()
        return await MPDClient("127.0.0.1", port, timeout_seconds=1).query("status")

    with pytest.raises(MPDError):
        asyncio.run(scenario())


def test_query_waits_for_socket_close() -> None:
    writer = MagicMock()
    writer.drain = AsyncMock()
    writer.wait_closed = AsyncMock()

    async def scenario():
        reader = asyncio.StreamReader()
        reader.feed_data(b"OK MPD 0.23.5\n" + STATUS_PLAYING.encode() + b"OK\n")
        reader.feed_eof()
        with patch("wledticker.data.mpd.asyncio.open_connection", AsyncMock(return_value=(reader, writer))):
            return await MPDClient("music.local").query("status")

    (status,) = asyncio.run(scenario())

    assert status["state"] == "play"
    writer.close.assert_called_once_with()
    writer.wait_closed.assert_awaited_once_with()


def test_format_now_playing_states() -> None:
    song = {"Artist": "Boards of Canada", "Title": "Roygbiv"}

    assert format_now_playing({"state": "play"}, song) == "Boards of Canada - Roygbiv"
    assert format_now_playing({"state": "pause"}, song) == "PAUSED Boards of Canada - Roygbiv"
    assert format_now_playing({"state": "stop"}, song) == ""
    assert format_now_playing({"state": "play"}, {"Name": "Radio Paradise"}) == "Radio Paradise"


def test_provider_formats_query_result() -> None:
    class FakeClient:
        async def query(self, *commands: str):
            assert commands == ("status", "currentsong")
            return [{"state": "play"}, {"Artist": "A", "Title": "B"}]

    provider = MPDProvider("mpd", client=FakeClient())

    assert asyncio.run(provider.get_text()) == "A - B"
