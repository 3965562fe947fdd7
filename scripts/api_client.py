"""Lightweight REST client for the dugout API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_json(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the dugout REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--season", default=None, help="Season id (defaults to the current season)")
    parser.add_argument("--uid", default=None, help="Admin user id for write operations")
    parser.add_argument("--roster", action="store_true", help="Print the sorted roster with stat lines")
    parser.add_argument("--trophies", action="store_true", help="Print the trophy allocation")
    parser.add_argument("--player", metavar="PLAYER_ID", help="Fetch a single player")
    parser.add_argument("--record-game", type=Path, metavar="JSON", help="Post a game entry from a JSON file")
    parser.add_argument("--rebuild-roster", type=Path, metavar="JSON", help="Replace the roster from a JSON file")
    args = parser.parse_args()

    params = {"season": args.season} if args.season else {}
    headers = {"X-Admin-Uid": args.uid} if args.uid else {}

    with httpx.Client(base_url=args.base_url, headers=headers, params=params) as client:
        if args.roster:
            resp = client.get("/roster")
            resp.raise_for_status()
            payload = resp.json()
            for player in payload["players"]:
                line = player["line"]
                print(
                    f"#{player['number']:>2} {player['name']:<24} "
                    f"{line['avg_display']} / {line['obp_display']} / {line['slg_display']}"
                )
        if args.trophies:
            resp = client.get("/trophies")
            resp.raise_for_status()
            for award in resp.json()["awards"]:
                print(f"{award['title']:<16} {award['winner']['name']:<24} {award['value_label']}")
        if args.player:
            resp = client.get(f"/players/{args.player}")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.player} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.rebuild_roster or args.record_game:
            if not args.uid:
                raise SystemExit("--uid is required for admin operations")
        if args.rebuild_roster:
            resp = client.post("/admin/roster", json=load_json(args.rebuild_roster))
            if resp.status_code >= 400:
                raise SystemExit(f"roster rebuild failed: {resp.json().get('detail')}")
            print(resp.json()["message"])
        if args.record_game:
            resp = client.post("/admin/games", json=load_json(args.record_game))
            if resp.status_code >= 400:
                raise SystemExit(f"game entry failed: {resp.json().get('detail')}")
            print(resp.json()["message"])


if __name__ == "__main__":
    main()
