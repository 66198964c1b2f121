import asyncio

from starlette.requests import Request

from storefront.api.parsing import ParseError, ParseOk, parse_json_body
from storefront.schemas.verification import VerifyCodeRequest


def _request(body: bytes) -> Request:
    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "headers": [(b"content-type", b"application/json")],
    }
    return Request(scope, receive)


def _parse(body: bytes):
    return asyncio.run(parse_json_body(_request(body), VerifyCodeRequest))


def test_valid_body_parses():
    result = _parse(b'{"code": "DRX-EGY-001"}')

    assert isinstance(result, ParseOk)
    assert result.payload.code == "DRX-EGY-001"


def test_malformed_json():
    assert _parse(b"{not json") == ParseError("invalid_json")


def test_non_object_body():
    assert _parse(b'["DRX-EGY-001"]') == ParseError("invalid_body")


def test_non_string_code_is_invalid_input():
    assert _parse(b'{"code": 7}') == ParseError("invalid_input")


def test_missing_code_is_invalid_input():
    assert _parse(b"{}") == ParseError("invalid_input")
