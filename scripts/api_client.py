"""Lightweight REST client for the nexusdfs API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc


def build_contest(args: argparse.Namespace) -> dict[str, object]:
    contest: dict[str, object] = {}
    if args.contest_name:
        contest["name"] = args.contest_name
    if args.entry_fee is not None:
        contest["entry_fee"] = args.entry_fee
    if args.field_size is not None:
        contest["field_size"] = args.field_size
    if args.prize_pool is not None:
        contest["prize_pool"] = args.prize_pool
    return contest


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the nexusdfs REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("lineups", type=Path, nargs="?", help="JSON file with one lineup or a list of lineups")
    parser.add_argument("--contest-name", default="", help="Contest display name (drives the contest kind)")
    parser.add_argument("--entry-fee", type=float, help="Contest entry fee")
    parser.add_argument("--field-size", type=int, help="Contest field size")
    parser.add_argument("--prize-pool", type=float, help="Contest prize pool")
    parser.add_argument("--historical", type=Path, help="JSON file with historical player data")
    parser.add_argument("--nexus-only", action="store_true", help="Only fetch NexusScore summaries")
    parser.add_argument("--select", action="store_true", help="Rank the lineups as a pool")
    parser.add_argument("--criteria", default="", help="JSON selection criteria for --select")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.lineups is None:
            resp = client.get("/health")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        payload = load_json(args.lineups)
        lineups = payload if isinstance(payload, list) else [payload]
        contest = build_contest(args)
        historical = load_json(args.historical) if args.historical else None

        if args.select:
            try:
                criteria = json.loads(args.criteria) if args.criteria else {}
            except json.JSONDecodeError as exc:
                raise SystemExit(f"Invalid criteria JSON: {exc}") from exc
            resp = client.post(
                "/pool/select",
                json={"lineups": lineups, "contest": contest, "historical": historical, "criteria": criteria},
            )
            resp.raise_for_status()
            body = resp.json()
            print("Pool summary:", json.dumps(body["pool_summary"], indent=2))
            print(f"Selected {len(body['lineups'])} lineups")
            for item in body["lineups"]:
                print(f"#{item['rank']:>3} roi={item['roi']:>8.2f} nexus={item['nexus_score']:>5.1f} {item['lineup_id']}")
            return

        for lineup in lineups:
            if args.nexus_only:
                resp = client.post("/nexus-score", json={"lineup": lineup})
            else:
                resp = client.post(
                    "/valuations",
                    json={"lineup": lineup, "contest": contest, "historical": historical},
                )
            if resp.status_code == 400:
                raise SystemExit(resp.json().get("detail", "invalid lineup"))
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
