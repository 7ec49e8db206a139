from __future__ import annotations

import argparse
import random

from subscriber_notebook.tools.subscriber_sim.http_post import post_subscriber

TEST_NAMES = [
    "Light Yagami",
    "L Lawliet",
    "Ryuk",
    "Misa Amane",
    "Near",
    "Mello",
    "Soichiro Yagami",
    "Teru Mikami",
    "Kiyomi Takada",
]


def random_batch(count: int, rng: random.Random | None = None) -> str:
    """`count` random test names joined into one multi-line payload."""
    rng = rng or random.Random()
    return "\n".join(rng.choice(TEST_NAMES) for _ in range(count))


def main() -> None:
    ap = argparse.ArgumentParser(description="Send test subscribers to the relay.")
    ap.add_argument("--url", default="http://127.0.0.1:5000", help="Relay base URL")
    ap.add_argument("--webhook", action="store_true", help="Use /api/webhook instead of /api/test-subscriber")
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--name", action="append", help="Name to send (repeatable; one request each)")
    group.add_argument("--writing-test", action="store_true", help="One payload with 6 random names")
    group.add_argument("--erase-test", action="store_true", help="One payload with 16 random names (fills both pages)")
    args = ap.parse_args()

    path = "/api/webhook" if args.webhook else "/api/test-subscriber"
    if args.name:
        payloads = args.name
    else:
        payloads = [random_batch(6 if args.writing_test else 16)]

    for payload in payloads:
        status, body = post_subscriber(args.url, payload, path=path)
        print(f"[send] {status} {body} <- {payload!r}")


if __name__ == "__main__":
    main()
