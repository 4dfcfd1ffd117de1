"""
Session resolution: `X-Token` -> user id (Redis) -> user record (MongoDB).
"""

import logging
from typing import Any, Dict, Optional

import redis

from files_manager.adapters.cache import RedisCache
from files_manager.errors import BackendUnavailableError, UnauthorizedError
from files_manager.services.database import UserService

logger = logging.getLogger(__name__)

AUTH_KEY_PREFIX = 'auth_'


def session_key(token: str) -> str:
    return f"{AUTH_KEY_PREFIX}{token}"


class AuthService:
    """Resolves a session token to the authenticated user record."""

    def __init__(self, cache: RedisCache, users: UserService):
        self.cache = cache
        self.users = users

    def get_user_id(self, token: Optional[str]) -> Optional[str]:
        """User id stored for the token, or None"""
        if not token:
            return None
        try:
            return self.cache.get(session_key(token))
        except redis.RedisError as e:
            logger.error(f"Session lookup failed: {e}")
            raise BackendUnavailableError() from e

    def authenticate(self, token: Optional[str]) -> Dict[str, Any]:
        """
        Return the user behind `token`.

        Raises:
            UnauthorizedError: no token, no session, or no such user.
            BackendUnavailableError: Redis or MongoDB could not be reached.
        """
        # Backend outages take precedence over a missing or unknown session
        if not (self.cache.is_alive() and self.users.is_alive()):
            logger.error("Rejected request: session backends unreachable")
            raise BackendUnavailableError()

        user_id = self.get_user_id(token)
        user = self.users.get_user(user_id)
        if not user:
            logger.warning("Rejected request with unknown session")
            raise UnauthorizedError()
        return user
