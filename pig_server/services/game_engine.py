"""Turn and session state machine of one player.

Every operation touches only the session of the identity it is addressed to.
"""

import logging

from pig_server.dice import DiceRoller
from pig_server.domain.pig_rules import (
    apply_bonus_points,
    apply_hold,
    apply_reset,
    apply_roll,
    validate_face,
    validate_points,
)
from pig_server.models.dc_models import SessionFieldModel, SessionModel
from pig_server.services.session_store import SessionStore


class GameEngine:
    def __init__(self, store: SessionStore, dice: DiceRoller):
        self.store: SessionStore = store
        self.dice: DiceRoller = dice

    async def roll(self, identity: str) -> SessionModel:
        """Roll the die for identity, starting a session on the first roll

        Args:
            identity (str): Authenticated caller

        Returns:
            SessionModel: State after the roll
        """
        return await self.roll_with_face(identity, self.dice.roll())

    async def roll_with_face(self, identity: str, face: int) -> SessionModel:
        """Roll with a known face instead of the random source

        Args:
            identity (str): Authenticated caller
            face (int): Die face, must be in [1, 6]

        Raises:
            InvalidInput: face is out of range
            GameOver: the session has already been won

        Returns:
            SessionModel: State after the roll
        """
        validate_face(identity, face)
        result = await self.store.mutate(
            identity, lambda current: apply_roll(identity, current, face), create_missing=True
        )
        if result.last_roll == 1:
            logging.info(f"{identity} busted on round {result.round}")
        else:
            logging.debug(f"{identity} rolled {face}, turn score {result.turn_score}")
        return result

    async def hold(self, identity: str) -> SessionModel:
        """Bank the turn's points

        Args:
            identity (str): Authenticated caller

        Raises:
            NoSession: identity has never rolled
            GameOver: the session has already been won

        Returns:
            SessionModel: State after the hold, game_over set when the target is reached
        """
        result = await self.store.mutate(identity, lambda current: apply_hold(identity, current))
        self._log_hold(identity, result)
        return result

    async def hold_with_points(self, identity: str, points: int) -> SessionModel:
        """Hold after putting points at risk directly, skipping the rolls

        Starts a session if needed, like roll.
        """
        validate_points(identity, points)

        def bank(current: SessionModel) -> SessionModel:
            return apply_hold(identity, apply_bonus_points(identity, current, points))

        result = await self.store.mutate(identity, bank, create_missing=True)
        self._log_hold(identity, result)
        return result

    async def reset(self, identity: str) -> SessionModel:
        """Clear the game but keep games_played

        Raises:
            NoSession: identity has never rolled
        """
        result = await self.store.mutate(identity, apply_reset)
        logging.info(f"{identity} reset the session")
        return result

    async def session_view(self, identity: str) -> SessionModel:
        """Session of any identity, zeros when it has none"""
        session = await self.store.get(identity)
        if session is None:
            return SessionModel()
        return session

    async def read_field(self, identity: str, field: SessionFieldModel) -> int | bool:
        session = await self.session_view(identity)
        if field == SessionFieldModel.user_completions:
            return session.games_played
        return getattr(session, field.value)

    async def last_roll(self, identity: str) -> int:
        return await self.read_field(identity, SessionFieldModel.last_roll)

    async def round(self, identity: str) -> int:
        return await self.read_field(identity, SessionFieldModel.round)

    async def turn(self, identity: str) -> int:
        return await self.read_field(identity, SessionFieldModel.turn)

    async def turn_score(self, identity: str) -> int:
        return await self.read_field(identity, SessionFieldModel.turn_score)

    async def total_score(self, identity: str) -> int:
        return await self.read_field(identity, SessionFieldModel.total_score)

    async def game_over(self, identity: str) -> bool:
        return await self.read_field(identity, SessionFieldModel.game_over)

    async def user_completions(self, identity: str) -> int:
        return await self.read_field(identity, SessionFieldModel.user_completions)

    @staticmethod
    def _log_hold(identity: str, result: SessionModel) -> None:
        if result.game_over:
            logging.info(f"{identity} won with {result.total_score} points after {result.turn} turns")
        else:
            logging.info(f"{identity} held, total score {result.total_score}")
