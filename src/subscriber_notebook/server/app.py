from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from subscriber_notebook.errors import InternalError, NotebookError, ValidationError
from subscriber_notebook.notebook.animator import SleepFn
from subscriber_notebook.notebook.overlay import NotebookOverlay
from subscriber_notebook.notebook.surface import BroadcastSurface
from subscriber_notebook.protocol.messages import Hello, SubscriberIn

from .config import Settings, get_settings
from .relay import EventRelay, viewer_id
from .viewer_page import render_viewer_html

logger = logging.getLogger(__name__)


def _origin_of(url: str) -> str:
    return url.rstrip("/")


def create_app(settings: Settings | None = None, *, sleep: SleepFn | None = None) -> FastAPI:
    settings = settings or get_settings()
    relay = EventRelay(debug_log_msgs=settings.debug_log_msgs)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        overlay = None
        if settings.overlay_enabled:
            kwargs = {"sleep": sleep} if sleep is not None else {}
            overlay = NotebookOverlay.from_settings(settings, BroadcastSurface(relay.broadcast), **kwargs)
            relay.subscribe(overlay.submit)
            logger.info("Notebook overlay started (%dx%d canvas)", settings.canvas_width, settings.canvas_height)
        app.state.overlay = overlay
        try:
            yield
        finally:
            if overlay is not None:
                relay.unsubscribe(overlay.submit)
                await overlay.close()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.relay = relay
    app.state.overlay = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[_origin_of(settings.client_url)],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotebookError)
    async def notebook_error(request: Request, exc: NotebookError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def bad_body(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    async def relay_subscriber(payload: SubscriberIn, source: str) -> dict:
        try:
            await relay.notify(payload.username)
        except ValidationError:
            raise
        except Exception as e:
            logger.exception("Error processing %s", source)
            raise InternalError() from e
        return {"success": True}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/api/webhook")
    async def webhook(payload: SubscriberIn):
        return await relay_subscriber(payload, "webhook")

    @app.post("/api/test-subscriber")
    async def test_subscriber(payload: SubscriberIn):
        return await relay_subscriber(payload, "test subscriber")

    @app.get("/viewer", response_class=HTMLResponse)
    def viewer():
        return HTMLResponse(render_viewer_html(settings.relay_url))

    @app.get("/snapshot.png")
    def snapshot(request: Request):
        overlay: NotebookOverlay | None = request.app.state.overlay
        if overlay is None:
            raise HTTPException(status_code=404, detail="overlay disabled")
        return Response(content=overlay.snapshot_png(), media_type="image/png")

    allowed_ws_origins = {_origin_of(settings.client_url), _origin_of(settings.relay_url)}

    @app.websocket("/ws")
    async def ws(ws: WebSocket):
        origin = ws.headers.get("origin")
        if origin is not None and _origin_of(origin) not in allowed_ws_origins:
            logger.warning("Refusing viewer %s from origin %s", viewer_id(ws), origin)
            await ws.close(code=1008)
            return

        await ws.accept()
        relay.connect(ws)

        try:
            await ws.send_text(json.dumps(Hello().model_dump(), separators=(",", ":")))
            while True:
                # viewers are listen-only; drain anything they send
                raw = await ws.receive_text()
                if settings.debug_log_msgs:
                    logger.debug("in from=%s raw=%s", viewer_id(ws), raw[:200])
        except WebSocketDisconnect:
            relay.disconnect(ws)
        except Exception:
            logger.exception("Viewer %s failed", viewer_id(ws))
            relay.disconnect(ws)

    return app


app = create_app()
