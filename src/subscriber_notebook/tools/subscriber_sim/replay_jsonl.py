from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from subscriber_notebook.tools.subscriber_sim.http_post import post_subscriber
from subscriber_notebook.tools.subscriber_sim.jsonl_format import decode_record


def load_subscribers(jsonl_path: Path) -> list[tuple[int | None, str]]:
    """Subscriber events from a JSONL log, in file order. See `jsonl_format` for the accepted lines."""
    events: list[tuple[int | None, str]] = []
    for line in jsonl_path.read_text(encoding="utf-8").splitlines():
        if not line.strip():
            continue
        event = decode_record(json.loads(line))
        if event is not None:
            events.append(event)
    return events


async def replay(base_url: str, jsonl_path: Path, *, speed: float = 1.0, default_dt_ms: int = 0) -> None:
    """Re-send recorded subscribers to the relay's test endpoint, keeping their spacing."""
    prev_ts: int | None = None
    for ts, username in load_subscribers(jsonl_path):
        if ts is not None and prev_ts is not None:
            dt_ms = max(0, ts - prev_ts)
        else:
            dt_ms = default_dt_ms
        prev_ts = ts if ts is not None else prev_ts
        if dt_ms:
            await asyncio.sleep((dt_ms / 1000.0) / max(0.01, speed))

        status, body = await asyncio.to_thread(post_subscriber, base_url, username)
        print(f"[replay] {status} {body} <- {username!r}")


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay recorded subscribers into the relay.")
    ap.add_argument("--url", default="http://127.0.0.1:5000", help="Relay base URL")
    ap.add_argument("--in", dest="inp", required=True, help="Input JSONL path")
    ap.add_argument("--speed", type=float, default=1.0, help="Speed multiplier (2.0 = 2x faster)")
    ap.add_argument("--default-dt-ms", type=int, default=0, help="Delay between messages if no timestamps")
    args = ap.parse_args()

    asyncio.run(replay(args.url, Path(args.inp), speed=args.speed, default_dt_ms=args.default_dt_ms))


if __name__ == "__main__":
    main()
