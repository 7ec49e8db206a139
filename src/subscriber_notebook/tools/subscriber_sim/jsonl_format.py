from __future__ import annotations

import json
import time
from typing import Any, Optional, TextIO

from subscriber_notebook.protocol.constants import T_NEW_SUBSCRIBER

# One JSON object per line.
#   subscriber events: {"ts": <ms>, "username": "..."}
#   anything else:     {"ts": <ms>, "msg": {...}}
# Older recordings wrapped every event as {"ts", "msg"}; bare messages
# without a timestamp are read too.


def now_ms() -> int:
    return int(time.time() * 1000)


def subscriber_of(msg: Any) -> Optional[str]:
    if not isinstance(msg, dict) or msg.get("t") != T_NEW_SUBSCRIBER:
        return None
    username = msg.get("username")
    return username if isinstance(username, str) and username else None


def encode_record(msg: Any, ts: int) -> dict[str, Any]:
    username = subscriber_of(msg)
    if username is not None:
        return {"ts": ts, "username": username}
    return {"ts": ts, "msg": msg}


def decode_record(obj: Any) -> Optional[tuple[Optional[int], str]]:
    """(ts, username) for a subscriber line, None for anything else."""
    if not isinstance(obj, dict):
        return None
    raw_ts = obj.get("ts")
    ts = int(raw_ts) if isinstance(raw_ts, (int, float)) else None
    if "t" not in obj and "username" in obj:
        username = obj["username"]
        return (ts, username) if isinstance(username, str) and username else None
    if isinstance(obj.get("msg"), dict):
        username = subscriber_of(obj["msg"])
    else:
        ts = None
        username = subscriber_of(obj)
    return None if username is None else (ts, username)


def write_record(f: TextIO, msg: Any, ts: int) -> None:
    f.write(json.dumps(encode_record(msg, ts), ensure_ascii=False) + "\n")
    f.flush()
