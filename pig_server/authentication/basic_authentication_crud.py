import hashlib
import logging
import secrets
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pig_server.models.basic_authentication_models import UserModel
from pig_server.models.schemas import UserTable

logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def hash_password(password: str, salt: str, pepper: str) -> str:
    return hashlib.sha256((password + salt + pepper).encode()).hexdigest()


class CreateAuthentication:
    @staticmethod
    async def create_user_data(username: str, password: str, pepper: str, session: AsyncSession) -> UserModel:
        """Create user data to authenticate the user

        Args:
            username (str): Login name, also the identity that owns the game session
            password (str): Plain password, only its salted hash is stored
            pepper (str): Server-wide secret appended before hashing
            session (AsyncSession): Session inside an open transaction

        Returns:
            UserModel: username, password hash and salt
        """
        salt = secrets.token_hex(8)
        new_user = UserTable(
            username=username,
            hash_password=hash_password(password, salt, pepper),
            salt=salt,
        )
        session.add(new_user)
        await session.flush()
        logging.info(f"Created user {username}")
        return UserModel.model_validate(new_user)


class ReadAuthentication:
    @staticmethod
    async def read_user_data(username: str, session: AsyncSession) -> UserModel | None:
        """Read user data to get salt and password hash

        Args:
            username (str): username of the user

        Returns:
            UserModel | None: username, password and salt, None if unknown
        """
        stmt = select(UserTable).where(UserTable.username == username)
        result = await session.execute(stmt)
        result = result.scalars().first()
        if result is None:
            logging.warning(f"User not found: {username}")
            return None
        return UserModel.model_validate(result)
