"""FastAPI service exposing the placement engine over HTTP and WebSocket."""
from __future__ import annotations

import json
import logging
import os
from typing import Dict, Optional

from fastapi import Body, FastAPI, HTTPException, WebSocket, WebSocketDisconnect

from .engine import TIME_BUDGET
from .parser import parse_board, parse_piece, parse_player_number
from .policies import DEFAULT_POLICY, POLICIES
from .protocol import format_move, make_chooser

logger = logging.getLogger(__name__)

app = FastAPI()


def default_policy() -> str:
    """Policy used when a request names none; ``FILLER_POLICY`` overrides it."""
    return os.environ.get("FILLER_POLICY", DEFAULT_POLICY)


def time_budget() -> float:
    """Seconds per decision; ``FILLER_TIME_BUDGET`` overrides it, 0 disables it."""
    value = os.environ.get("FILLER_TIME_BUDGET")
    if value is None:
        return TIME_BUDGET
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring bad FILLER_TIME_BUDGET %r", value)
        return TIME_BUDGET


def decide(board: str, piece: str, player: int, policy: Optional[str] = None) -> Dict:
    """Parse one turn's blocks and return the chosen move as a JSON-ready dict."""
    name = policy or default_policy()
    if name not in POLICIES:
        raise HTTPException(status_code=404, detail=f"Unknown policy {name!r}")
    if player not in (1, 2):
        raise HTTPException(status_code=400, detail="player must be 1 or 2")
    grid = parse_board(board.splitlines(), player)
    if grid is None:
        raise HTTPException(status_code=400, detail="Could not parse board")
    shape = parse_piece(piece.splitlines())
    if shape is None:
        raise HTTPException(status_code=400, detail="Could not parse piece")
    move = make_chooser(POLICIES[name], time_budget())(grid, shape)
    logger.debug("p%d with %s plays %s", player, name, move)
    return {
        "move": list(move) if move is not None else None,
        "output": format_move(move),
        "policy": name,
    }


class BotSession:
    """State for one WebSocket connection: which player the bot is."""

    def __init__(self) -> None:
        self.player: Optional[int] = None

    def handle(self, msg: Dict) -> Dict:
        """Answer a single client message."""
        action = msg.get("action")
        if action == "handshake":
            player = parse_player_number(str(msg.get("line", "")))
            if player is None:
                return {"type": "error", "message": "Not a player line"}
            self.player = player
            return {"type": "ready", "player": player}
        if action == "turn":
            if self.player is None:
                return {"type": "error", "message": "Handshake first"}
            try:
                result = decide(
                    str(msg.get("board", "")),
                    str(msg.get("piece", "")),
                    self.player,
                    msg.get("policy"),
                )
            except HTTPException as exc:
                return {"type": "error", "message": exc.detail}
            return {"type": "move", **result}
        return {"type": "error", "message": f"Unknown action {action!r}"}


@app.get("/policies")
async def list_policies() -> dict:
    return {"policies": list(POLICIES.keys()), "default": default_policy()}


@app.post("/move")
async def post_move(data: Dict = Body(...)) -> dict:
    board = data.get("board")
    piece = data.get("piece")
    if not isinstance(board, str) or not isinstance(piece, str):
        raise HTTPException(status_code=400, detail="board and piece must be text")
    player = data.get("player", 1)
    if not isinstance(player, int):
        raise HTTPException(status_code=400, detail="player must be 1 or 2")
    return decide(board, piece, player, data.get("policy"))


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await websocket.accept()
    session = BotSession()
    try:
        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                await websocket.send_text(
                    json.dumps({"type": "error", "message": "Invalid JSON"})
                )
                continue
            if not isinstance(msg, dict):
                await websocket.send_text(
                    json.dumps({"type": "error", "message": "Expected an object"})
                )
                continue
            await websocket.send_text(json.dumps(session.handle(msg)))
    except WebSocketDisconnect:
        logger.debug("Client disconnected")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
