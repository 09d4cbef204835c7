from typing import Any
import pytest
from pydantic import BaseModel
from gsltctrl.exceptions import DecodeError, EncodeError
from gsltctrl.models.game_server import (
    AccountList,
    CreateAccountRequest,
    GameServer,
    ResetLoginTokenRequest,
    ResetLoginTokenResult,
)
from gsltctrl.utils.codec import decode, encode, unwrap


def test_encode_create_payload_is_compact():
    payload = CreateAccountRequest(appid=730, memo="test-server")
    assert encode(payload) == '{"appid":730,"memo":"test-server"}'


def test_encode_reset_payload_keeps_steamid_as_number():
    payload = ResetLoginTokenRequest(steamid=900000000000000001)
    assert encode(payload) == '{"steamid":900000000000000001}'


class OpaquePayload(BaseModel):
    memo: Any


def test_encode_failure_raises_encode_error():
    with pytest.raises(EncodeError) as exc_info:
        encode(OpaquePayload(memo=object()))
    assert exc_info.value.exit_code == 7


def test_payloads_survive_round_trip():
    create = CreateAccountRequest(appid=4020, memo="eu-west #2")
    reset = ResetLoginTokenRequest(steamid=85568392920040000)

    assert decode(encode(create), CreateAccountRequest) == create
    assert decode(encode(reset), ResetLoginTokenRequest) == reset


def test_missing_memo_defaults_to_empty_string():
    server = decode(
        '{"steamid": "1", "appid": 730, "login_token": "T", "is_expired": false}',
        GameServer,
    )
    assert server.memo == ""
    assert server.is_deleted is False


def test_unknown_fields_are_ignored():
    body = '{"response": {"login_token": "NEW", "brand_new_field": [1, 2, 3]}}'
    assert unwrap(body, ResetLoginTokenResult).login_token == "NEW"


def test_unwrap_account_list_with_only_servers():
    account = unwrap('{"response": {"servers": []}}', AccountList)
    assert account.servers == []
    assert account.is_banned is False


def test_malformed_json_raises_decode_error():
    with pytest.raises(DecodeError) as exc_info:
        unwrap("<html>Service Unavailable</html>", AccountList)
    assert exc_info.value.exit_code == 4
    assert exc_info.value.text == "<html>Service Unavailable</html>"
    assert "Service Unavailable" in exc_info.value.message


def test_unexpected_shape_raises_decode_error():
    with pytest.raises(DecodeError):
        unwrap('{"servers": []}', AccountList)


def test_appid_out_of_range_is_rejected():
    with pytest.raises(DecodeError):
        decode(
            '{"steamid": "1", "appid": 4294967296, "login_token": "T", "is_expired": false}',
            GameServer,
        )


@pytest.mark.parametrize("field,value", [
    ("is_expired", '"false"'),
    ("is_expired", '"no"'),
    ("is_expired", "0"),
    ("appid", '"730"'),
    ("appid", "730.0"),
    ("steamid", "1"),
])
def test_wrongly_typed_server_fields_raise_decode_error(field, value):
    fields = {"steamid": '"1"', "appid": "730", "login_token": '"T"',
              "memo": '"m"', "is_expired": "true"}
    fields[field] = value
    server = ", ".join(f'"{k}": {v}' for k, v in fields.items())

    with pytest.raises(DecodeError):
        unwrap('{"response": {"servers": [' + "{" + server + "}" + "]}}", AccountList)


def test_wrongly_typed_token_raises_decode_error():
    with pytest.raises(DecodeError):
        unwrap('{"response": {"login_token": 12345}}', ResetLoginTokenResult)
