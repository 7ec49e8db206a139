from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any, TextIO

import websockets

from subscriber_notebook.tools.subscriber_sim.jsonl_format import now_ms, subscriber_of, write_record


def keep(msg: Any, *, only_subscribers: bool) -> bool:
    return not only_subscribers or subscriber_of(msg) is not None


def log_event(f: TextIO, msg: Any, *, echo: bool, only_subscribers: bool) -> bool:
    """Append one relay message to the log. Returns False when it is filtered out."""
    if not keep(msg, only_subscribers=only_subscribers):
        return False
    if echo:
        username = subscriber_of(msg)
        if username is not None:
            print(f"[record] subscriber {username!r}")
        else:
            print(f"[record] {msg.get('t') if isinstance(msg, dict) else '?'}")
    write_record(f, msg, now_ms())
    return True


async def record(ws_url: str, out_path: Path, *, echo: bool, only_subscribers: bool) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    kept = 0
    with out_path.open("a", encoding="utf-8") as f:
        try:
            async with websockets.connect(ws_url) as ws:
                async for frame in ws:
                    if isinstance(frame, bytes):
                        frame = frame.decode("utf-8", errors="replace")
                    if log_event(f, json.loads(frame), echo=echo, only_subscribers=only_subscribers):
                        kept += 1
        finally:
            print(f"[record] {kept} event(s) written to {out_path}")


def main() -> None:
    ap = argparse.ArgumentParser(description="Log subscriber events (and optionally draw commands) from the relay.")
    ap.add_argument("--ws", required=True, help="WebSocket URL, e.g. ws://127.0.0.1:5000/ws")
    ap.add_argument("--out", required=True, help="Output JSONL path")
    ap.add_argument("--print", action="store_true", help="Print each kept event to stdout")
    ap.add_argument("--only-subscribers", action="store_true", help="Skip hello and draw commands")
    args = ap.parse_args()

    asyncio.run(record(args.ws, Path(args.out), echo=args.print, only_subscribers=args.only_subscribers))


if __name__ == "__main__":
    main()
