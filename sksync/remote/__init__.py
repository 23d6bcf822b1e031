# SKSYNC Remote Module
# Client for the server-held skill version history

from sksync.remote.auth import BearerAuth, EnvTokenProvider, StaticTokenProvider, TokenProvider
from sksync.remote.cache import TTLCache
from sksync.remote.client import DEFAULT_URL, VersionHistoryClient
from sksync.remote.errors import AuthError, RemoteError

__all__ = [
    # Client
    "DEFAULT_URL",
    "VersionHistoryClient",
    # Auth
    "BearerAuth",
    "EnvTokenProvider",
    "StaticTokenProvider",
    "TokenProvider",
    # Cache
    "TTLCache",
    # Errors
    "AuthError",
    "RemoteError",
]
