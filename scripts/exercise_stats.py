#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class SampleRequest:
    width: int
    height: int
    square: int | None = None
    text: str | None = None
    referrer: str | None = None


def build_sample_requests() -> list[SampleRequest]:
    return [
        SampleRequest(width=300, height=200),
        SampleRequest(width=640, height=480, square=40, referrer="https://blog.example/post"),
        SampleRequest(width=300, height=200, text="Hero banner", referrer="https://blog.example/post"),
        SampleRequest(width=120, height=120, square=10, text="Avatar"),
        SampleRequest(width=300, height=200, referrer="https://shop.example/"),
        SampleRequest(width=0, height=50),
        SampleRequest(width=50, height=2500),
        SampleRequest(width=50, height=50, square=-1),
    ]


def send_request(client: httpx.Client, base_url: str, sample: SampleRequest) -> tuple[str, str]:
    params: dict[str, str] = {}
    if sample.square is not None:
        params["square"] = str(sample.square)
    if sample.text is not None:
        params["text"] = sample.text
    headers = {"Referer": sample.referrer} if sample.referrer else {}

    try:
        response = client.get(
            f"{base_url.rstrip('/')}/img/{sample.width}/{sample.height}",
            params=params,
            headers=headers,
        )
    except httpx.HTTPError as exc:
        return ("error", f"request_failed: {exc}")

    if response.status_code == 200:
        return ("served", f"{len(response.content)} bytes")
    return ("rejected", f"status={response.status_code}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Send sample image requests and print usage stats")
    parser.add_argument(
        "--base-url",
        default="http://localhost:8080",
        help="Server base URL (default: http://localhost:8080)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear all stats before sending requests",
    )
    args = parser.parse_args()
    base_url = args.base_url.rstrip("/")

    with httpx.Client(timeout=10) as client:
        if args.reset:
            client.delete(f"{base_url}/stats").raise_for_status()

        samples = build_sample_requests()
        print(f"Sending {len(samples)} image requests to {base_url}...")
        for sample in samples:
            outcome, info = send_request(client, base_url, sample)
            print(f"- {sample.width}x{sample.height}: {outcome} ({info})")

        for path in [
            "/stats/paths/recent",
            "/stats/sizes/recent",
            "/stats/texts/recent",
            "/stats/sizes/top",
            "/stats/referrers/top",
            "/stats/hits",
        ]:
            response = client.get(f"{base_url}{path}")
            print(f"\n{path}\n{json.dumps(response.json(), indent=2)}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
