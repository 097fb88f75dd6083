from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CredentialsRequestDTO(BaseModel):
    """Body of /api/register and /api/login.

    Emptiness is a domain rule (``invalid_input``); this model only rejects
    wrong JSON types.
    """

    username: str = ""
    secret: str = Field("", validation_alias=AliasChoices("secret", "password"))

    model_config = ConfigDict(extra="ignore")


class AuthSuccessDTO(BaseModel):
    success: bool = True
    username: str


class MessageDTO(BaseModel):
    message: str


class CurrentUserDTO(BaseModel):
    username: str
