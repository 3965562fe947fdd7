"""Command-line interface for inspecting and maintaining the team roster."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from dugout.admin import AdminActionError, rebuild_roster, switch_season
from dugout.config import load_settings
from dugout.config_loader import ColumnProfile
from dugout.ingest import load_draft_csv
from dugout.persistence import SeasonStore
from dugout.roster import sort_roster
from dugout.stats import STAT_KEYS, compute_leaders, fmt3, stat_line
from dugout.trophies import compute_trophies


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Team roster, stats and trophies")
    parser.add_argument("--db", type=Path, default=Path(settings.db_path), help="Path to the SQLite database")
    parser.add_argument("--season", default=None, help="Season id (defaults to the current season)")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("roster", help="Show the roster in display order")
    sub.add_parser("leaders", help="Show team leaders per stat")
    sub.add_parser("trophies", help="Show the trophy allocation")

    imp = sub.add_parser("import-roster", help="Replace the roster from a CSV file")
    imp.add_argument("csv", type=Path, help="CSV with name/number/position columns")
    imp.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First Name|Last Name)",
    )
    imp.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    imp.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)

    grant = sub.add_parser("grant-admin", help="Add a user id to the admin allowlist")
    grant.add_argument("uid")
    grant.add_argument("--email", default=None)

    switch = sub.add_parser("switch-season", help="Create or select the current season")
    switch.add_argument("season_id")
    switch.add_argument("--team-name", default="")
    switch.add_argument("--season-label", default="")
    switch.add_argument("--league", default="")

    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _print_roster(store: SeasonStore, season_id: str, as_json: bool) -> None:
    players = sort_roster(store.list_players(season_id))
    if as_json:
        payload = [
            {"id": p.id, "name": p.name, "number": p.number, **stat_line(p).model_dump()}
            for p in players
        ]
        print(json.dumps(payload, indent=2))
        return
    meta = store.get_meta(season_id)
    print(f"{meta.team_name} – {meta.season_label} ({meta.record.wins}-{meta.record.losses})")
    print(f"{'#':>3}  {'Name':<24} {'AB':>4} {'H':>4} {'AVG':>6} {'OBP':>6} {'SLG':>6} {'OPS':>6}")
    for p in players:
        line = stat_line(p)
        print(
            f"{p.number:>3}  {p.name:<24} {p.stats.at_bats:>4} {p.stats.hits:>4} "
            f"{fmt3(line.avg):>6} {fmt3(line.obp):>6} {fmt3(line.slg):>6} {fmt3(line.ops):>6}"
        )


def _print_leaders(store: SeasonStore, season_id: str, as_json: bool) -> None:
    players = store.list_players(season_id)
    leaders = compute_leaders(players)
    if as_json:
        print(json.dumps(leaders, indent=2))
        return
    names = {p.id: p.name for p in players}
    for key in STAT_KEYS:
        ids = leaders[key]
        print(f"{key:>8}: {', '.join(names[i] for i in ids) if ids else '-'}")


def _print_trophies(store: SeasonStore, season_id: str, as_json: bool) -> None:
    awards = compute_trophies(store.list_players(season_id))
    if as_json:
        payload = [
            {
                "key": a.trophy.key,
                "title": a.trophy.title,
                "winner": a.winner.id,
                "runner_up": a.runner_up.id if a.runner_up else None,
                "value_label": a.value_label,
                "value_sub": a.value_sub,
            }
            for a in awards
        ]
        print(json.dumps(payload, indent=2))
        return
    for a in awards:
        runner_up = a.runner_up.name if a.runner_up else "-"
        sub = f" ({a.value_sub})" if a.value_sub else ""
        print(f"{a.trophy.title:<16} {a.winner.name:<24} {a.value_label}{sub}  runner-up: {runner_up}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    store = SeasonStore(args.db)
    season_id = args.season or store.get_current_season_id() or settings.default_season_id

    if args.command == "roster":
        _print_roster(store, season_id, args.json)
    elif args.command == "leaders":
        _print_leaders(store, season_id, args.json)
    elif args.command == "trophies":
        _print_trophies(store, season_id, args.json)
    elif args.command == "import-roster":
        try:
            mapping = _parse_mapping(args.column)
            if args.load_profile:
                mapping = ColumnProfile.load(args.load_profile).roster_mapping | mapping
            draft = load_draft_csv(args.csv, mapping=mapping or None)
            count = rebuild_roster(store, season_id, draft)
        except (ValueError, OSError) as exc:
            print(f"Import failed: {exc}")
            return 1
        if args.save_profile:
            ColumnProfile(mapping).save(args.save_profile)
            print(f"Saved mapping profile to {args.save_profile}")
        print(f"Rebuilt {season_id} roster with {count} players")
    elif args.command == "grant-admin":
        store.add_admin(args.uid, args.email)
        print(f"Granted admin access to {args.uid}")
    elif args.command == "switch-season":
        try:
            sid = switch_season(
                store,
                args.season_id,
                team_name=args.team_name,
                season_label=args.season_label,
                league=args.league,
                fallback_team_name=settings.team_name,
            )
        except AdminActionError as exc:
            print(f"Switch failed: {exc}")
            return 1
        print(f"Current season is now {sid}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
