from enum import Enum
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

T = TypeVar("T")


class WebApiResponse(BaseModel):
    """Base for decoded answers: no type coercion, unknown fields ignored."""
    model_config = ConfigDict(strict=True, extra="ignore")


class ResponseEnvelope(WebApiResponse, Generic[T]):
    """Every IGameServersService answer is wrapped as {"response": ...}."""
    response: T


class GameServer(WebApiResponse):
    steamid: str
    appid: int = Field(ge=0, le=U32_MAX)
    login_token: str
    memo: str = ""
    is_expired: bool
    is_deleted: bool = False
    rt_last_logon: int = 0


class AccountList(WebApiResponse):
    servers: List[GameServer]
    is_banned: bool = False
    expires: int = 0
    actor: str = ""
    last_action_time: int = 0


class CreateAccountResult(WebApiResponse):
    steamid: str
    login_token: str


class ResetLoginTokenResult(WebApiResponse):
    login_token: str


class CreateAccountRequest(BaseModel):
    appid: int = Field(ge=0, le=U32_MAX)
    memo: str


class ResetLoginTokenRequest(BaseModel):
    steamid: int = Field(ge=0, le=U64_MAX)


class MatchOutcome(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"


class ServerMatch(BaseModel):
    outcome: MatchOutcome
    login_token: Optional[str] = None
    steamid: Optional[str] = None

    @classmethod
    def found(cls, login_token: str) -> "ServerMatch":
        return cls(outcome=MatchOutcome.FOUND, login_token=login_token)

    @classmethod
    def not_found(cls) -> "ServerMatch":
        return cls(outcome=MatchOutcome.NOT_FOUND)

    @classmethod
    def expired(cls, steamid: str) -> "ServerMatch":
        return cls(outcome=MatchOutcome.EXPIRED, steamid=steamid)
