#!/usr/bin/env python3
"""
E2E smoke test for the transcode worker: check liveness, then push one notification.

Requires transcode-worker running and the source object already present in the raw
bucket. Usage:

  python scripts/push_e2e.py clip1.mp4 [--base-url http://localhost:3000]

Exit 0 if the worker acknowledges the job (200); non-zero otherwise.
"""

from __future__ import annotations

import argparse
import base64
import json
import ssl
import sys
import urllib.error
import urllib.request


def build_envelope(filename: str, bucket: str | None = None) -> bytes:
    """Push envelope whose message data is base64 JSON {"name": filename}."""
    payload: dict = {"name": filename}
    if bucket:
        payload["bucket"] = bucket
    data = base64.b64encode(json.dumps(payload).encode()).decode()
    return json.dumps(
        {
            "message": {"data": data, "messageId": "push-e2e"},
            "subscription": "projects/local/subscriptions/push-e2e",
        }
    ).encode()


def main() -> int:
    parser = argparse.ArgumentParser(description="Transcode worker E2E smoke test")
    parser.add_argument("filename", help="Object key in the raw bucket (e.g. clip1.mp4)")
    parser.add_argument(
        "--base-url",
        default="http://localhost:3000",
        help="Transcode worker base URL",
    )
    parser.add_argument("--bucket", default=None, help="Raw bucket name to include in the payload")
    parser.add_argument(
        "--timeout",
        type=float,
        default=600,
        help="Seconds to wait for the job to finish",
    )
    parser.add_argument(
        "--no-verify-ssl",
        action="store_true",
        help="Skip SSL certificate verification (insecure; for testing only)",
    )
    args = parser.parse_args()
    base = args.base_url.rstrip("/")

    ctx = None
    if args.no_verify_ssl:
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE

    # 1. Liveness
    try:
        with urllib.request.urlopen(f"{base}/", timeout=10, context=ctx) as resp:
            print(f"GET / -> {resp.status}: {resp.read().decode().strip()}")
    except OSError as e:
        print(f"Worker not reachable at {base}: {e}", file=sys.stderr)
        return 1

    # 2. Push one notification and wait for the job outcome
    req = urllib.request.Request(
        f"{base}/process-video",
        data=build_envelope(args.filename, args.bucket),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(req, timeout=args.timeout, context=ctx) as resp:
            body = resp.read().decode()
    except urllib.error.HTTPError as e:
        print(f"POST /process-video failed: {e.code}", file=sys.stderr)
        if e.fp:
            print(e.fp.read().decode(), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    print(f"POST /process-video -> 200: {body}")
    print("OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
