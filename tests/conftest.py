import json
import pytest
import httpx
from gsltctrl.clients.transport import WebApiTransport
from gsltctrl.clients.game_servers_client import GameServersClient

API_KEY = "test-api-key"
BASE_URL = "https://api.example.test/IGameServersService"


class FakeSteamApi:
    """Routes mocked IGameServersService calls and records every request."""

    def __init__(self, servers=None):
        self.servers = list(servers or [])
        self.requests = []
        self.create_token = "CREATED-TOKEN"
        self.reset_token = "RESET-TOKEN"
        self.status_overrides = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/IGameServersService/", 1)[-1]

        if endpoint in self.status_overrides:
            return httpx.Response(self.status_overrides[endpoint], headers={"x-eresult": "15"})

        if endpoint == "GetAccountList/v1":
            body = {"response": {
                "servers": self.servers,
                "is_banned": False,
                "expires": 0,
                "actor": "76561197960287930",
                "last_action_time": 1700000000,
            }}
        elif endpoint == "CreateAccount/v1":
            body = {"response": {"steamid": "85568392920040000", "login_token": self.create_token}}
        elif endpoint == "ResetLoginToken/v1":
            body = {"response": {"login_token": self.reset_token}}
        else:
            return httpx.Response(404)
        return httpx.Response(200, json=body)

    @property
    def mock_transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def endpoints(self):
        return [r.url.path.rsplit("/", 2)[-2] for r in self.requests]

    def input_json(self, index: int):
        raw = self.requests[index].url.params.get("input_json")
        return raw if raw is None else json.loads(raw)


def game_server(**overrides):
    server = {
        "steamid": "85568392920039999",
        "appid": 730,
        "login_token": "ABC123",
        "memo": "test-server",
        "is_deleted": False,
        "is_expired": False,
        "rt_last_logon": 1700000000,
    }
    server.update(overrides)
    return server


@pytest.fixture
def fake_api():
    return FakeSteamApi()


@pytest.fixture
def transport(fake_api):
    with WebApiTransport(API_KEY, base_url=BASE_URL, transport=fake_api.mock_transport) as t:
        yield t


@pytest.fixture
def client(transport):
    return GameServersClient(transport)


@pytest.fixture
def api_env(monkeypatch):
    monkeypatch.setenv("GSLTCTRL_TOKEN", API_KEY)
    monkeypatch.setenv("GSLTCTRL_BASE_URL", BASE_URL)
    monkeypatch.delenv("GSLTCTRL_TIMEOUT", raising=False)
