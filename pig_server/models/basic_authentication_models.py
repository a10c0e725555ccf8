from pydantic import BaseModel, ConfigDict


class UserModel(BaseModel):
    """Registered player. The login name doubles as the identity that owns a game session."""
    model_config = ConfigDict(from_attributes=True)

    username: str
    hash_password: str
    salt: str

    @property
    def identity(self) -> str:
        return self.username
