from __future__ import annotations

import json
import urllib.error
import urllib.request


def post_subscriber(base_url: str, username: str, *, path: str = "/api/test-subscriber", timeout_s: float = 5.0) -> tuple[int, dict]:
    """POST `{"username": ...}` to the relay; returns (status, json body)."""
    url = base_url.rstrip("/") + path
    data = json.dumps({"username": username}).encode("utf-8")
    req = urllib.request.Request(
        url,
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            return resp.status, json.loads(resp.read().decode("utf-8"))
    except urllib.error.HTTPError as e:
        return e.code, json.loads(e.read().decode("utf-8") or "{}")
