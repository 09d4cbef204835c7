from typing import List
from gsltctrl.clients.transport import WebApiTransport
from gsltctrl.config.logging import get_logger
from gsltctrl.models.game_server import (
    AccountList,
    CreateAccountRequest,
    CreateAccountResult,
    GameServer,
    ResetLoginTokenRequest,
    ResetLoginTokenResult,
)
from gsltctrl.utils.codec import encode, unwrap


class GameServersClient:
    """Domain operations of the IGameServersService interface."""

    GET_ACCOUNT_LIST = "GetAccountList/v1"
    CREATE_ACCOUNT = "CreateAccount/v1"
    RESET_LOGIN_TOKEN = "ResetLoginToken/v1"

    def __init__(self, transport: WebApiTransport):
        self.transport = transport
        self.logger = get_logger("gsltctrl.client")

    def get_account_list(self) -> AccountList:
        body = self.transport.request(self.GET_ACCOUNT_LIST, "GET")
        account = unwrap(body, AccountList)
        self.logger.debug("Fetched account list", server_count=len(account.servers),
                          is_banned=account.is_banned)
        return account

    def list_servers(self) -> List[GameServer]:
        return self.get_account_list().servers

    def create_server(self, appid: int, memo: str) -> str:
        """Create a game server account and return its login token.

        Assumes no account for ``(appid, memo)`` exists yet; the caller has to
        check that beforehand.
        """
        payload = encode(CreateAccountRequest(appid=appid, memo=memo))
        body = self.transport.request(self.CREATE_ACCOUNT, "POST", input_json=payload)
        result = unwrap(body, CreateAccountResult)
        self.logger.info("Created game server account", appid=appid, steamid=result.steamid)
        return result.login_token

    def reset_token(self, steamid: int) -> str:
        """Reset the login token of the server ``steamid`` and return the new one."""
        payload = encode(ResetLoginTokenRequest(steamid=steamid))
        body = self.transport.request(self.RESET_LOGIN_TOKEN, "POST", input_json=payload)
        result = unwrap(body, ResetLoginTokenResult)
        self.logger.info("Reset game server login token", steamid=steamid)
        return result.login_token
