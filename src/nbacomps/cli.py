"""Command-line interface for querying and serving the recommendation index."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, replace
from pathlib import Path
from typing import Sequence

import uvicorn

from nbacomps.api import create_app, profile_to_response
from nbacomps.config import Settings
from nbacomps.config_loader import SourceProfile
from nbacomps.export import export_players_to_csv
from nbacomps.index import PlayerProfile, RecommendationIndex, build_index
from nbacomps.ingest import IndexLoadError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Look up precomputed similar NBA players")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding the three default artifacts")
    parser.add_argument("--career", type=Path, default=None, help="Career similarity JSON")
    parser.add_argument("--season", type=Path, default=None, help="Season similarity JSON")
    parser.add_argument("--stats", type=Path, default=None, help="Per-season stats CSV")
    parser.add_argument("--load-profile", type=Path, help="Load source paths from JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save resolved source paths to JSON", default=None)
    parser.add_argument(
        "--strict-ordering",
        action="store_true",
        default=None,
        help="Fail when a similarity list is not sorted by descending score",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write player results to this CSV instead of printing JSON",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    commands.add_parser("summary", help="Print the load report")

    search = commands.add_parser("search", help="Search players by name")
    search.add_argument("query")

    career = commands.add_parser("career", help="Career-level recommendations")
    career.add_argument("player_id", type=int)

    season = commands.add_parser("season", help="Season-level recommendations")
    season.add_argument("player_id", type=int)
    season.add_argument("year", type=int)

    seasons = commands.add_parser("seasons", help="Seasons available for a player")
    seasons.add_argument("player_id", type=int)

    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if args.data_dir:
        base = Settings.for_data_dir(args.data_dir)
        settings = settings.with_paths(
            career_path=base.career_path,
            season_path=base.season_path,
            stats_path=base.stats_path,
        )
    if args.load_profile:
        profile = SourceProfile.load(args.load_profile)
        settings = settings.with_paths(
            career_path=profile.career_path,
            season_path=profile.season_path,
            stats_path=profile.stats_path,
        )
    settings = settings.with_paths(
        career_path=args.career,
        season_path=args.season,
        stats_path=args.stats,
    )
    if args.strict_ordering is not None:
        settings = replace(settings, strict_ordering=args.strict_ordering)
    return settings


def _validate(parser: argparse.ArgumentParser, args: argparse.Namespace, settings: Settings) -> None:
    if args.command == "search":
        if not args.query.strip() or len(args.query) > settings.max_query_length:
            parser.error("Invalid player name query.")
    if args.command == "season" and (args.player_id <= 0 or args.year <= 0):
        parser.error("Invalid player ID or season.")
    if args.command in {"career", "seasons"} and args.player_id <= 0:
        parser.error("Invalid player ID.")


def _emit_players(profiles: list[PlayerProfile], output: Path | None) -> None:
    if output:
        output.write_text(export_players_to_csv(profiles), encoding="utf-8")
        print(f"Wrote {len(profiles)} players to {output}")
        return
    payload = [profile_to_response(profile).model_dump(by_alias=True) for profile in profiles]
    print(json.dumps(payload, indent=2))


def _run_query(args: argparse.Namespace, index: RecommendationIndex) -> None:
    if args.command == "summary":
        print(json.dumps(asdict(index.report), indent=2))
    elif args.command == "search":
        _emit_players(index.search_players(args.query), args.output)
    elif args.command == "career":
        _emit_players(index.career_recommendations(args.player_id), args.output)
    elif args.command == "season":
        _emit_players(index.season_recommendations(args.player_id, args.year), args.output)
    elif args.command == "seasons":
        print(json.dumps(index.seasons_for_player(args.player_id)))


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = _resolve_settings(args)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    _validate(parser, args, settings)

    if args.save_profile:
        SourceProfile(settings.career_path, settings.season_path, settings.stats_path).save(args.save_profile)
        print(f"Saved source profile to {args.save_profile}")

    try:
        index = build_index(
            settings.career_path,
            settings.season_path,
            settings.stats_path,
            strict_ordering=settings.strict_ordering,
        )
    except IndexLoadError as exc:
        raise SystemExit(f"Failed to load recommendation index: {exc}") from exc

    if args.command == "serve":
        app = create_app(index, settings)
        uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
        return
    _run_query(args, index)


if __name__ == "__main__":
    main()
