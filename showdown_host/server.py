from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

import websockets
from websockets.server import WebSocketServerProtocol

from showdown.errors import ShowdownError, UnregisteredPlayers
from showdown.game import Game
from showdown.models import GameConfig

from .records import ResultLog, ResultRecord

LOGGER = logging.getLogger("poker_host")

# DealServer glues the deal engine to WebSocket clients. Every network concern
# lives here; Game stays pure.


class RequestError(Exception):
    def __init__(self, code: str, msg: str, **extra: object) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg
        self.extra = extra


class DealServer:
    def __init__(self, config: GameConfig, history_limit: int = 100) -> None:
        self.config = config
        self.results = ResultLog(limit=history_limit)
        self.lock = asyncio.Lock()

    async def start(self, host: str = "0.0.0.0", port: int = 8765) -> None:
        async with websockets.serve(self._handle_connection, host, port):
            LOGGER.info("Deal server listening on %s:%s", host, port)
            await asyncio.Future()

    async def _handle_connection(self, websocket: WebSocketServerProtocol) -> None:
        try:
            async for raw in websocket:
                await self._handle_message(websocket, self._decode(raw))
        except websockets.ConnectionClosed:
            pass

    async def _handle_message(self, websocket: WebSocketServerProtocol, message: Optional[Dict[str, object]]) -> None:
        if message is None:
            await self._send_error(websocket, code="BAD_SCHEMA", msg="Expected a JSON object")
            return
        msg_type = message.get("type")
        if msg_type is None:
            await self._send_error(websocket, code="BAD_SCHEMA", msg="type required")
            return
        try:
            if msg_type == "start_game":
                record = await self._start_game(message)
                await self._send_json(websocket, "game_result", record.to_payload())
            elif msg_type == "get_result":
                record = await self._get_result(message)
                await self._send_json(websocket, "game_result", record.to_payload())
            else:
                await self._send_error(websocket, code="UNKNOWN_TYPE", msg="Unsupported message type")
        except RequestError as exc:
            LOGGER.warning("Rejected %s request: %s", msg_type, exc.msg)
            await self._send_error(websocket, code=exc.code, msg=exc.msg, **exc.extra)

    async def _start_game(self, message: Dict[str, object]) -> ResultRecord:
        names = self._roster(message.get("players"))
        expected = message.get("number_of_players")
        if expected is not None and expected != len(names):
            raise RequestError("BAD_REQUEST", f"Expected {expected} players, got {len(names)}")
        seed = message.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise RequestError("BAD_SCHEMA", "seed must be an integer")

        try:
            config = self.config if seed is None else replace(self.config, seed=seed)
            game = Game(names, config)
            result = game.play_to_showdown()
        except UnregisteredPlayers as exc:
            raise RequestError(exc.code, exc.msg, players=exc.names) from exc
        except ShowdownError as exc:
            raise RequestError(exc.code, exc.msg) from exc

        async with self.lock:
            record = self.results.add(result, seed=game.seed)
        LOGGER.info(
            "Deal %s finished; winners=%s hand=%s",
            record.event_id,
            result.winners,
            game.winning_hand,
        )
        return record

    async def _get_result(self, message: Dict[str, object]) -> ResultRecord:
        event_id = message.get("event_id")
        if not isinstance(event_id, int):
            raise RequestError("BAD_SCHEMA", "event_id required")
        async with self.lock:
            record = self.results.get(event_id)
        if record is None:
            raise RequestError("GAME_NOT_FOUND", f"Game not found with id: {event_id}")
        return record

    def _roster(self, players: object) -> List[str]:
        if not isinstance(players, list):
            raise RequestError("BAD_SCHEMA", "players required")
        names: List[str] = []
        for entry in players:
            name = entry.get("name") if isinstance(entry, dict) else entry
            if not isinstance(name, str):
                raise RequestError("BAD_SCHEMA", "player name required")
            names.append(name)
        return names

    async def _send_json(self, websocket: WebSocketServerProtocol, msg_type: str, payload: Dict[str, object]) -> None:
        try:
            await websocket.send(self._envelope(msg_type, payload))
        except websockets.ConnectionClosed:
            pass

    async def _send_error(self, websocket: WebSocketServerProtocol, code: str, msg: str, **extra: object) -> None:
        payload: Dict[str, object] = {"code": code, "msg": msg}
        payload.update(extra)
        await self._send_json(websocket, "error", payload)

    def _envelope(self, msg_type: str, payload: Dict[str, object]) -> str:
        body = {"type": msg_type, "v": 1, "ts": datetime.now(timezone.utc).isoformat()}
        body.update(payload)
        return json.dumps(body)

    def _decode(self, raw: str) -> Optional[Dict[str, object]]:
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            return None
        return message if isinstance(message, dict) else None
