"""WebSocket server for the game, and the command that starts it."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import threading
from collections.abc import Sequence

import websockets

from .game_manager import GameManager
from .player import PlayerManager
from .session import Session

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


class Server:
    """Accepts WebSocket clients and runs one session for each."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
        self.host = host
        self.port = port
        self.ready = threading.Event()
        self._player_manager = PlayerManager()
        self._game_manager = GameManager()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event: asyncio.Event | None = None
        self._stop_requested = threading.Event()
        self._guard = threading.Lock()

    async def serve(self) -> None:
        """Serve clients until stop() is called."""
        stop_event = asyncio.Event()
        with self._guard:
            self._loop = asyncio.get_running_loop()
            self._stop_event = stop_event
            if self._stop_requested.is_set():
                stop_event.set()
        async with websockets.serve(self._handle, self.host, self.port) as server:
            self.port = next(iter(server.sockets)).getsockname()[1]
            self.ready.set()
            logger.info("listening on %s:%d", self.host, self.port)
            await stop_event.wait()
        self.ready.clear()

    def start(self) -> None:
        """Serve clients, blocking until stop() is called."""
        asyncio.run(self.serve())

    def stop(self) -> None:
        """Ask the server to shut down; safe to call from any thread."""
        with self._guard:
            self._stop_requested.set()
            if self._loop is not None and self._stop_event is not None:
                self._loop.call_soon_threadsafe(self._stop_event.set)

    async def _handle(self, websocket, *_) -> None:
        outgoing: asyncio.Queue[str] = asyncio.Queue()
        session = Session(self._player_manager, self._game_manager, outgoing.put_nowait)
        writer = asyncio.create_task(self._write(websocket, outgoing))
        try:
            async for data in websocket:
                text = data.decode("utf-8", "replace") if isinstance(data, bytes) else data
                answer = session.process_command(text)
                if answer:
                    outgoing.put_nowait(answer)
            logger.info("client socket shutdown")
        except websockets.ConnectionClosed as error:
            logger.warning("connection lost: %s", error)
        finally:
            session.close()
            writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await writer

    @staticmethod
    async def _write(websocket, outgoing: asyncio.Queue[str]) -> None:
        while True:
            message = await outgoing.get()
            try:
                await websocket.send(message)
            except websockets.ConnectionClosed:
                return


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game server."""
    parser = argparse.ArgumentParser(description="Tic-tac-toe WebSocket server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    server = Server(args.host, args.port)
    with contextlib.suppress(KeyboardInterrupt):
        server.start()
    return 0