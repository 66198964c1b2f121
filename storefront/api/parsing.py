"""Explicit JSON body parsing for endpoints with a fixed error contract.

FastAPI's automatic body validation answers with a 422 shape. The public
tracking and verification endpoints promise their own error bodies instead,
so they receive a ``ParseResult`` and decide what a parse failure means.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from fastapi import Request
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ParseOk(Generic[ModelT]):
    payload: ModelT


@dataclass(frozen=True)
class ParseError:
    reason: str


ParseResult = Union[ParseOk[ModelT], ParseError]


async def parse_json_body(request: Request, model: type[ModelT]) -> ParseResult[ModelT]:
    try:
        data = await request.json()
    except ValueError:
        return ParseError("invalid_json")
    if not isinstance(data, dict):
        return ParseError("invalid_body")
    try:
        return ParseOk(model.model_validate(data))
    except ValidationError:
        return ParseError("invalid_input")


def json_body(model: type[ModelT]):
    """Build a dependency that parses the request body into ``model``."""

    async def _dependency(request: Request) -> ParseResult[ModelT]:
        return await parse_json_body(request, model)

    return _dependency


__all__ = ["ParseError", "ParseOk", "ParseResult", "json_body", "parse_json_body"]
