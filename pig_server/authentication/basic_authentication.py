import argparse
import asyncio
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import async_sessionmaker

from pig_server.authentication.basic_authentication_crud import (
    CreateAuthentication,
    ReadAuthentication,
    hash_password,
)
from pig_server.models.basic_authentication_models import UserModel

security = HTTPBasic()


class BasicAuthentication:
    def __init__(self, Session: async_sessionmaker, pepper: str, reserved_names: tuple[str, ...] = ()):
        self.Session: async_sessionmaker = Session
        self.pepper: str = pepper
        self.reserved_names: tuple[str, ...] = reserved_names

    async def check_user_data(
        self, credentials: HTTPBasicCredentials = Depends(security)
    ) -> UserModel:
        """Check if the user data is valid. The username becomes the identity of the caller

        Args:
            credentials (HTTPBasicCredentials, optional): Username and password. Defaults to Depends(security).

        Raises:
            HTTPException: The user is not found in the database
            HTTPException: The password is incorrect

        Returns:
            UserModel: The authenticated user
        """
        async with self.Session() as session:
            user_data = await ReadAuthentication.read_user_data(credentials.username, session)
        if user_data is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username",
                headers={"WWW-Authenticate": "Basic"},
            )

        hashed_password = hash_password(credentials.password, user_data.salt, self.pepper)
        if not secrets.compare_digest(hashed_password, user_data.hash_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid password",
                headers={"WWW-Authenticate": "Basic"},
            )
        return user_data

    async def store_user_data(self, user_name: str, password: str) -> UserModel:
        if user_name in self.reserved_names:
            raise ValueError(f"{user_name} is reserved")
        async with self.Session() as session:
            async with session.begin():
                return await CreateAuthentication.create_user_data(user_name, password, self.pepper, session)

    async def read_user_data(self, user_name: str) -> UserModel | None:
        async with self.Session() as session:
            return await ReadAuthentication.read_user_data(user_name, session)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Register a player for basic authentication")
    parser.add_argument("--username", type=str, help="Username", required=True)
    parser.add_argument("--password", type=str, help="Password", required=True)
    return parser


async def main(user_name: str, password: str):
    from pig_server.db import Session, create_tables, engine
    from pig_server.load_secrets import aggregate_slot, pepper_data

    await create_tables(engine)
    basic_auth = BasicAuthentication(Session, pepper_data, reserved_names=(aggregate_slot,))
    await basic_auth.store_user_data(user_name, password)
    user_data = await basic_auth.read_user_data(user_name)
    print(user_data.username, user_data.hash_password, user_data.salt)
    await engine.dispose()


if __name__ == "__main__":
    parser = get_parser()
    args = parser.parse_args()
    asyncio.run(main(args.username, args.password))
