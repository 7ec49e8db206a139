from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from fastapi import WebSocket

from subscriber_notebook.errors import ValidationError
from subscriber_notebook.protocol.messages import NewSubscriber

logger = logging.getLogger(__name__)

Listener = Callable[[str], Awaitable[None]]


def viewer_id(ws: WebSocket) -> str:
    client = ws.client
    if client is None:
        return f"ws-{id(ws):x}"
    return f"{client.host}:{client.port}"


@dataclass
class EventRelay:
    """Fan-out of subscriber events to every connected viewer. No history is kept."""

    clients: set[WebSocket] = field(default_factory=set)
    listeners: list[Listener] = field(default_factory=list)
    debug_log_msgs: bool = False

    def connect(self, ws: WebSocket) -> None:
        self.clients.add(ws)
        logger.info("Viewer connected: %s (%d connected)", viewer_id(ws), len(self.clients))

    def disconnect(self, ws: WebSocket) -> None:
        if ws in self.clients:
            self.clients.discard(ws)
            logger.info("Viewer disconnected: %s (%d connected)", viewer_id(ws), len(self.clients))

    def subscribe(self, listener: Listener) -> None:
        self.listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    async def notify(self, username: Optional[str]) -> None:
        """Validate and relay one subscriber. Raises ValidationError when absent or empty."""
        if not username:
            raise ValidationError()
        await self.broadcast(NewSubscriber(username=username).model_dump())
        logger.info("New subscriber: %s", username)
        for listener in self.listeners:
            await listener(username)

    async def broadcast(self, msg: dict[str, Any], exclude: WebSocket | None = None) -> None:
        dead: list[WebSocket] = []
        data = json.dumps(msg, separators=(",", ":"), ensure_ascii=False)
        if self.debug_log_msgs:
            logger.debug("out t=%s to %d viewer(s)", msg.get("t"), len(self.clients))
        for ws in list(self.clients):
            if exclude is ws:
                continue
            try:
                await ws.send_text(data)
            except Exception as e:
                logger.warning("Send to %s failed, dropping viewer: %s", viewer_id(ws), e)
                dead.append(ws)
        for ws in dead:
            self.disconnect(ws)
