"""
Tests del canal WebSocket de eventos
"""
import asyncio
import json

import pytest

from app.modules.realtime.manager import ConnectionManager


class FakeSocket:
    def __init__(self, broken=False):
        self.broken = broken
        self.accepted = False
        self.messages = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, text):
        if self.broken:
            raise RuntimeError("socket closed")
        self.messages.append(json.loads(text))


class TestConnectionManager:

    def test_broadcast_drops_broken_sockets(self):
        manager = ConnectionManager()
        healthy, broken = FakeSocket(), FakeSocket(broken=True)

        async def scenario():
            await manager.connect(healthy)
            await manager.connect(broken)
            await manager.broadcast("commentAdded", {"jobId": "42"})

        asyncio.run(scenario())
        assert healthy.accepted
        assert healthy.messages == [{"event": "commentAdded", "data": {"jobId": "42"}}]
        assert manager.connection_count == 1


class TestRealtimeSocket:

    def test_ping_pong(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_text("ping")
            assert websocket.receive_text() == "pong"

    def test_socket_is_unregistered_after_receive_error(self, client, app):
        with pytest.raises(Exception):
            with client.websocket_connect("/ws") as websocket:
                websocket.send_bytes(b"\x00\x01")
                websocket.receive_text()
        assert app.state.realtime.connection_count == 0

    def test_job_created_is_broadcast(self, client, technician_headers, sample_customer):
        with client.websocket_connect("/ws") as websocket:
            client.post(
                "/api/jobs",
                json={"customer": str(sample_customer.id), "vehicle": {"make": "Suzuki", "model": "Alto"}, "title": "Tuning"},
                headers=technician_headers,
            )
            message = websocket.receive_json()
        assert message["event"] == "jobUpdated"
        assert message["data"]["type"] == "created"
        assert message["data"]["job"]["title"] == "Tuning"
