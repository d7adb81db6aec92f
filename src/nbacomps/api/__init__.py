"""REST API for the similar-player recommendation index."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Iterable

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nbacomps.api.schemas import HealthResponse, LoadReportResponse, PlayerResponse, SeasonResponse
from nbacomps.config import Settings
from nbacomps.index import PlayerProfile, RecommendationIndex, build_index


logger = logging.getLogger("uvicorn.error")

API_PREFIX = "/api/similarplayer"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}

INVALID_QUERY = "Invalid player name query."
INVALID_PLAYER_ID = "Invalid player ID."
INVALID_PLAYER_OR_SEASON = "Invalid player ID or season."


def profile_to_response(profile: PlayerProfile) -> PlayerResponse:
    seasons = None
    if profile.seasons is not None:
        seasons = [
            SeasonResponse(year=line.year, team=line.team, stats=line.stats)
            for line in profile.seasons
        ]
    return PlayerResponse(
        player_id=profile.player_id,
        name=profile.name,
        years=profile.years,
        teams=list(profile.teams) if profile.teams is not None else None,
        career_stats=profile.career_stats,
        season_stats=profile.season_stats,
        seasons=seasons,
        similarity_score=profile.similarity_score,
    )


def _to_responses(profiles: Iterable[PlayerProfile]) -> list[PlayerResponse]:
    return [profile_to_response(profile) for profile in profiles]


def _validation_detail(path: str) -> str:
    route = path[len(API_PREFIX):] if path.startswith(API_PREFIX) else path
    if route.startswith("/season/"):
        return INVALID_PLAYER_OR_SEASON
    if route.rstrip("/") == "/players":
        return INVALID_QUERY
    return INVALID_PLAYER_ID


def _require_positive(*values: int, detail: str) -> None:
    if any(value <= 0 for value in values):
        raise HTTPException(status_code=400, detail=detail)


def _build_router(index: RecommendationIndex, settings: Settings) -> APIRouter:
    router = APIRouter(prefix=API_PREFIX)

    @router.get("/players", response_model=list[PlayerResponse])
    async def search_players(
        query: str | None = Query(None),
        limit: int | None = Query(None, ge=1, le=500),
    ):
        if query is None or not query.strip() or len(query) > settings.max_query_length:
            raise HTTPException(status_code=400, detail=INVALID_QUERY)
        profiles = index.search_players(query)
        if limit is not None:
            profiles = profiles[:limit]
        return _to_responses(profiles)

    @router.get("/players/{player_id}", response_model=PlayerResponse)
    async def get_player(player_id: int):
        _require_positive(player_id, detail=INVALID_PLAYER_ID)
        profile = index.get_player(player_id)
        if profile is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return profile_to_response(profile)

    @router.get("/career/{player_id}", response_model=list[PlayerResponse])
    async def career_recommendations(player_id: int):
        _require_positive(player_id, detail=INVALID_PLAYER_ID)
        return _to_responses(index.career_recommendations(player_id))

    @router.get("/season/{player_id}/{season}", response_model=list[PlayerResponse])
    async def season_recommendations(player_id: int, season: int):
        _require_positive(player_id, season, detail=INVALID_PLAYER_OR_SEASON)
        return _to_responses(index.season_recommendations(player_id, season))

    @router.get("/seasons/{player_id}", response_model=list[int])
    async def available_seasons(player_id: int):
        _require_positive(player_id, detail=INVALID_PLAYER_ID)
        return index.seasons_for_player(player_id)

    return router


def create_app(
    index: RecommendationIndex | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the app around a fully loaded index.

    When no index is passed it is built from ``settings`` (or the environment)
    before the app exists, so a load failure stops startup.
    """

    settings = settings or Settings.from_env()
    if index is None:
        index = build_index(
            settings.career_path,
            settings.season_path,
            settings.stats_path,
            strict_ordering=settings.strict_ordering,
        )

    app = FastAPI(title="nbacomps similar players")
    app.state.index = index
    app.state.settings = settings

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logger.debug("Rejected %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": _validation_detail(request.url.path)})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers[header] = value
        return response

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", report=LoadReportResponse(**asdict(index.report)))

    app.include_router(_build_router(index, settings))
    logger.info("Serving %d players from %s", index.report.players, settings.stats_path)
    return app
