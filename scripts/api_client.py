"""Lightweight REST client for the clipmark API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _parse_players(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the clipmark REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--list-tags", action="store_true", help="List tags and exit")
    parser.add_argument("--category", metavar="CATEGORY_ID", help="Only list tags in this category")
    parser.add_argument("--summary", action="store_true", help="Print per-category and per-player counts")
    parser.add_argument("--export-path", type=Path, help="Download the CSV export to this path")
    parser.add_argument(
        "--tag",
        nargs=3,
        metavar=("SECONDS", "CATEGORY_ID", "DESCRIPTION"),
        help="Create a tag",
    )
    parser.add_argument("--players", default="", help="Comma-separated player ids for --tag")
    parser.add_argument("--video-url", default=None, help="Source video URL for --tag")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.tag:
            seconds, category_id, description = args.tag
            payload = {
                "timestamp": int(seconds),
                "categoryId": category_id,
                "description": description,
                "playerIds": _parse_players(args.players),
                "videoUrl": args.video_url,
            }
            resp = client.post("/api/tags", json=payload)
            if resp.status_code in (400, 404):
                raise SystemExit(f"tag rejected: {resp.json()['detail']}")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))

        if args.list_tags:
            params = {"categoryId": args.category} if args.category else None
            resp = client.get("/api/tags", params=params)
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))

        if args.summary:
            resp = client.get("/api/analysis")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))

        if args.export_path:
            resp = client.get("/api/export/csv")
            resp.raise_for_status()
            args.export_path.write_text(resp.text, encoding="utf-8")
            print(f"CSV export saved to {args.export_path}")


if __name__ == "__main__":
    main()
