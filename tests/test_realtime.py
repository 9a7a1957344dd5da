import asyncio

from app.shared.infrastructure.realtime.connection_manager import ConnectionManager


class FakeSocket:
    """Mimics Starlette's refusal to send before the handshake is accepted."""

    def __init__(self, accept_immediately: bool = True):
        self.accepted = False
        self.release = asyncio.Event()
        if accept_immediately:
            self.release.set()
        self.frames = []
        self.broken = False

    async def accept(self):
        await self.release.wait()
        self.accepted = True

    async def send_json(self, message):
        if not self.accepted:
            raise RuntimeError('WebSocket is not connected. Need to call "accept" first.')
        if self.broken:
            raise RuntimeError("connection reset")
        self.frames.append(message)


async def test_broadcast_during_handshake_keeps_the_subscriber():
    manager = ConnectionManager()
    socket = FakeSocket(accept_immediately=False)

    handshake = asyncio.create_task(manager.connect(socket))
    await asyncio.sleep(0)
    assert await manager.broadcast("itemCreated", {"id": 1}) == 0

    socket.release.set()
    await handshake

    assert manager.connection_count == 1
    assert await manager.broadcast("itemUpdated", {"id": 1}) == 1
    assert socket.frames == [{"event": "itemUpdated", "data": {"id": 1}}]


async def test_failed_send_drops_only_that_subscriber():
    manager = ConnectionManager()
    healthy, broken = FakeSocket(), FakeSocket()
    await manager.connect(healthy)
    await manager.connect(broken)
    broken.broken = True

    assert await manager.broadcast("orderCreated", {"total": 35}) == 1
    assert manager.connection_count == 1
    assert healthy.frames == [{"event": "orderCreated", "data": {"total": 35}}]

    await manager.disconnect(healthy)
    assert manager.connection_count == 0
