"""Tests for remote error classification."""

from __future__ import annotations

import asyncio
import json

import httpx
import openai
import pytest

from zerohour.config import ZeroHourConfig
from zerohour.prioritize.errors import (
    MalformedResponseError,
    RemoteErrorKind,
    classify_remote_error,
    describe_remote_error,
)

_REQUEST = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")


def _status_error(cls: type[openai.APIStatusError], status: int) -> openai.APIStatusError:
    response = httpx.Response(status, request=_REQUEST)
    return cls("error", response=response, body=None)


class _StatusError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"status {status_code}")
        self.status_code = status_code


@pytest.mark.parametrize(
    "error, kind",
    [
        (_status_error(openai.AuthenticationError, 401), RemoteErrorKind.AUTH),
        (_status_error(openai.PermissionDeniedError, 403), RemoteErrorKind.AUTH),
        (_status_error(openai.RateLimitError, 429), RemoteErrorKind.RATE_LIMIT),
        (_status_error(openai.NotFoundError, 404), RemoteErrorKind.NOT_FOUND),
        (openai.APITimeoutError(request=_REQUEST), RemoteErrorKind.TIMEOUT),
        (openai.APIConnectionError(request=_REQUEST), RemoteErrorKind.TRANSPORT),
        (asyncio.TimeoutError(), RemoteErrorKind.TIMEOUT),
        (_StatusError(429), RemoteErrorKind.RATE_LIMIT),
        (_StatusError(401), RemoteErrorKind.AUTH),
        (_StatusError(404), RemoteErrorKind.NOT_FOUND),
        (MalformedResponseError("empty"), RemoteErrorKind.MALFORMED),
        (json.JSONDecodeError("bad", "doc", 0), RemoteErrorKind.MALFORMED),
        (RuntimeError("boom"), RemoteErrorKind.TRANSPORT),
    ],
)
def test_classify(error: BaseException, kind: RemoteErrorKind):
    assert classify_remote_error(error) == kind


def test_descriptions_are_distinct():
    config = ZeroHourConfig(model="some-model")
    error = RuntimeError("boom")
    messages = {describe_remote_error(kind, error, config) for kind in RemoteErrorKind}
    assert len(messages) == len(RemoteErrorKind)


def test_not_found_names_model():
    config = ZeroHourConfig(model="llama-missing")
    message = describe_remote_error(RemoteErrorKind.NOT_FOUND, RuntimeError(), config)
    assert "llama-missing" in message


def test_rate_limit_mentions_quota():
    message = describe_remote_error(RemoteErrorKind.RATE_LIMIT, RuntimeError(), ZeroHourConfig())
    assert "429" in message
