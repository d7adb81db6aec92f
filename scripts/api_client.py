"""Lightweight REST client for the nbacomps API."""

from __future__ import annotations

import argparse
import json

import httpx


API_PREFIX = "/api/similarplayer"


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the nbacomps REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--search", metavar="QUERY", help="Search players by name")
    parser.add_argument("--career", metavar="PLAYER_ID", type=int, help="Career recommendations for a player")
    parser.add_argument(
        "--season",
        nargs=2,
        metavar=("PLAYER_ID", "YEAR"),
        type=int,
        help="Season recommendations for one player season",
    )
    parser.add_argument("--seasons", metavar="PLAYER_ID", type=int, help="List a player's seasons")
    parser.add_argument("--limit", type=int, default=None, help="Truncate search results")
    parser.add_argument("--health", action="store_true", help="Print the load report and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.health:
            resp = client.get("/health")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return
        requests: list[tuple[str, dict]] = []
        if args.search:
            params = {"query": args.search}
            if args.limit:
                params["limit"] = args.limit
            requests.append((f"{API_PREFIX}/players", params))
        if args.career is not None:
            requests.append((f"{API_PREFIX}/career/{args.career}", {}))
        if args.season:
            player_id, year = args.season
            requests.append((f"{API_PREFIX}/season/{player_id}/{year}", {}))
        if args.seasons is not None:
            requests.append((f"{API_PREFIX}/seasons/{args.seasons}", {}))
        if not requests:
            raise SystemExit("Nothing to do: pass --search, --career, --season, --seasons or --health")
        for path, params in requests:
            resp = client.get(path, params=params)
            if resp.status_code == 400:
                raise SystemExit(f"{path}: {resp.json().get('detail')}")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
