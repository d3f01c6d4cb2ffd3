"""Tests for CapitalizeServer."""

import pytest
import pytest_asyncio
from websockets.asyncio.client import connect

from socket_chat.infrastructure.server import CapitalizeServer


@pytest_asyncio.fixture
async def server():
    """Run a server on an ephemeral local port."""
    async with CapitalizeServer("127.0.0.1", 0) as running:
        yield running


class TestCapitalizeServer:
    """Test the server against a plain websockets client."""

    @pytest.mark.asyncio
    async def test_binds_ephemeral_port(self, server):
        """Test port 0 resolves to the bound port."""
        assert server.is_serving
        assert server.port > 0
        assert server.url == f"ws://127.0.0.1:{server.port}"

    @pytest.mark.asyncio
    async def test_replies_capitalized(self, server):
        """Test each message is answered with the transform."""
        async with connect(server.url) as websocket:
            await websocket.send("hello world")
            assert await websocket.recv() == "Hello world"

            await websocket.send("a")
            assert await websocket.recv() == "A"

    @pytest.mark.asyncio
    async def test_empty_message(self, server):
        """Test the empty message reply."""
        async with connect(server.url) as websocket:
            await websocket.send("")
            assert await websocket.recv() == "Empty message received"

    @pytest.mark.asyncio
    async def test_binary_frames_decoded(self, server):
        """Test binary frames are treated as UTF-8 text."""
        async with connect(server.url) as websocket:
            await websocket.send("über".encode("utf-8"))
            assert await websocket.recv() == "Über"

    @pytest.mark.asyncio
    async def test_stop(self):
        """Test stop closes the listener and is idempotent."""
        server = CapitalizeServer("127.0.0.1", 0)
        assert not server.is_serving

        await server.start()
        assert server.is_serving

        await server.stop()
        await server.stop()
        assert not server.is_serving
