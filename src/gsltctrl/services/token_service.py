import re
from typing import Iterable
from gsltctrl.clients.game_servers_client import GameServersClient
from gsltctrl.config.logging import get_logger
from gsltctrl.exceptions import DomainParseError
from gsltctrl.models.game_server import U64_MAX, GameServer, MatchOutcome, ServerMatch

logger = get_logger("gsltctrl.service")

_STEAMID_PATTERN = re.compile(r"\+?[0-9]+")


def find_server(servers: Iterable[GameServer], appid: int, memo: str) -> ServerMatch:
    """Classify the server list for ``(appid, memo)``.

    Matching is exact on both fields. The first matching server wins.
    """
    match = None
    duplicates = 0
    for server in servers:
        if server.appid == appid and server.memo == memo:
            if match is None:
                match = server
            else:
                duplicates += 1

    if match is None:
        return ServerMatch.not_found()

    if duplicates:
        logger.debug("Ignoring duplicate servers for appid and memo",
                     appid=appid, duplicates=duplicates)

    if match.is_expired:
        return ServerMatch.expired(match.steamid)
    return ServerMatch.found(match.login_token)


def parse_steamid(steamid: str) -> int:
    if not _STEAMID_PATTERN.fullmatch(steamid):
        raise DomainParseError(f"Error while parsing steamid {steamid!r}: not an unsigned integer")
    value = int(steamid)
    if value > U64_MAX:
        raise DomainParseError(f"Error while parsing steamid {steamid!r}: number too large")
    return value


class TokenService:
    """Returns a valid login token, creating or renewing the server account as needed."""

    def __init__(self, client: GameServersClient):
        self.client = client

    def obtain_token(self, appid: int, memo: str) -> str:
        servers = self.client.list_servers()
        match = find_server(servers, appid, memo)
        logger.debug("Classified server list", appid=appid, outcome=match.outcome.value)

        if match.outcome == MatchOutcome.FOUND:
            return match.login_token
        if match.outcome == MatchOutcome.EXPIRED:
            return self.client.reset_token(parse_steamid(match.steamid))
        return self.client.create_server(appid, memo)
