# SKSYNC Authentication
# Bearer-token auth for the version store; credential refresh is external

import os
from collections.abc import Callable, Generator
from typing import Optional

import httpx

from sksync.remote.errors import AuthError, error_message

TokenProvider = Callable[[], Optional[str]]

DEFAULT_TOKEN_ENV = "SKSYNC_TOKEN"


class StaticTokenProvider:
    """Token provider returning a fixed token."""

    def __init__(self, token: Optional[str]):
        self._token = token

    def __call__(self) -> Optional[str]:
        return self._token


class EnvTokenProvider:
    """Token provider reading an environment variable on every request."""

    def __init__(self, env_var: str = DEFAULT_TOKEN_ENV):
        self.env_var = env_var

    def __call__(self) -> Optional[str]:
        return os.environ.get(self.env_var) or None


class BearerAuth(httpx.Auth):
    """
    httpx auth flow adding `Authorization: Bearer <token>`.

    The provider is asked for a token on each request so that an external
    refresh mechanism can rotate it. If the provider has nothing, the
    request is never sent.
    """

    requires_response_body = True

    def __init__(self, provider: TokenProvider):
        self.provider = provider

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self.provider()
        if not token:
            raise AuthError("Not authenticated: no access token available")
        request.headers["Authorization"] = f"Bearer {token}"
        response = yield request
        if response.status_code == 401:
            raise AuthError(error_message(response) or "Authentication rejected (401)", status_code=401)
