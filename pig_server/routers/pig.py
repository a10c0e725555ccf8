import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status

from pig_server.authentication.basic_authentication import BasicAuthentication
from pig_server.errors import AlreadyCompleted, GameOver, InvalidInput, NoSession, NotWon, PigError
from pig_server.models.basic_authentication_models import UserModel
from pig_server.models.dc_models import (
    GlobalCompletionsModel,
    SessionFieldModel,
    SessionFieldValueModel,
    SessionModel,
)
from pig_server.services.game_engine import GameEngine
from pig_server.services.stats_aggregator import StatsAggregator

ERROR_STATUS = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    NoSession: status.HTTP_404_NOT_FOUND,
    GameOver: status.HTTP_409_CONFLICT,
    NotWon: status.HTTP_409_CONFLICT,
    AlreadyCompleted: status.HTTP_409_CONFLICT,
}


def to_http_exception(error: PigError) -> HTTPException:
    """Turn a rejected operation into the HTTP error sent to the client"""
    status_code = ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST)
    logging.warning(f"Rejected: {error}")
    return HTTPException(status_code=status_code, detail=error.to_dict())


def build_pig_router(
    game_engine: GameEngine,
    stats_aggregator: StatsAggregator,
    basic_auth: BasicAuthentication,
    enable_test_routes: bool = False,
) -> APIRouter:
    """Routes of the game.

    Mutating routes act on the authenticated user only; reads accept any identity.

    Args:
        game_engine (GameEngine): Session state machine
        stats_aggregator (StatsAggregator): Completion counters
        basic_auth (BasicAuthentication): Identity provider
        enable_test_routes (bool): Mount the deterministic roll and hold routes

    Returns:
        APIRouter: Router to include in the app
    """
    pig_router = APIRouter()

    @pig_router.post("/roll", response_model=SessionModel)
    async def roll(user_data: UserModel = Depends(basic_auth.check_user_data)) -> SessionModel:
        try:
            return await game_engine.roll(user_data.identity)
        except PigError as e:
            raise to_http_exception(e) from e

    @pig_router.post("/hold", response_model=SessionModel)
    async def hold(user_data: UserModel = Depends(basic_auth.check_user_data)) -> SessionModel:
        try:
            return await game_engine.hold(user_data.identity)
        except PigError as e:
            raise to_http_exception(e) from e

    @pig_router.post("/complete", response_model=SessionModel)
    async def complete(user_data: UserModel = Depends(basic_auth.check_user_data)) -> SessionModel:
        try:
            return await stats_aggregator.complete(user_data.identity)
        except PigError as e:
            raise to_http_exception(e) from e

    @pig_router.post("/reset", response_model=SessionModel)
    async def reset(user_data: UserModel = Depends(basic_auth.check_user_data)) -> SessionModel:
        try:
            return await game_engine.reset(user_data.identity)
        except PigError as e:
            raise to_http_exception(e) from e

    if enable_test_routes:

        @pig_router.post("/test/roll/{face}", response_model=SessionModel)
        async def roll_with_face(
            face: int = Path(...),
            user_data: UserModel = Depends(basic_auth.check_user_data),
        ) -> SessionModel:
            try:
                return await game_engine.roll_with_face(user_data.identity, face)
            except PigError as e:
                raise to_http_exception(e) from e

        @pig_router.post("/test/hold/{points}", response_model=SessionModel)
        async def hold_with_points(
            points: int = Path(...),
            user_data: UserModel = Depends(basic_auth.check_user_data),
        ) -> SessionModel:
            try:
                return await game_engine.hold_with_points(user_data.identity, points)
            except PigError as e:
                raise to_http_exception(e) from e

    @pig_router.get("/sessions/{identity}", response_model=SessionModel)
    async def get_session(identity: str) -> SessionModel:
        return await game_engine.session_view(identity)

    @pig_router.get("/sessions/{identity}/{field}", response_model=SessionFieldValueModel)
    async def get_session_field(identity: str, field: SessionFieldModel) -> SessionFieldValueModel:
        value = await game_engine.read_field(identity, field)
        return SessionFieldValueModel(identity=identity, field=field, value=value)

    @pig_router.get("/stats/global", response_model=GlobalCompletionsModel)
    async def get_global_completions() -> GlobalCompletionsModel:
        total = await stats_aggregator.global_completions()
        return GlobalCompletionsModel(total_completions=total)

    return pig_router
