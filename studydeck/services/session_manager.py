import logging
import secrets
from datetime import datetime, timedelta
from typing import Dict, Any, Optional

from jose import JWTError, jwt

from studydeck.core.config import SESSION_EXPIRY_HOURS, SESSION_SECRET, SESSION_ALGORITHM

logger = logging.getLogger(__name__)


class SessionManager:
    """Server-side login sessions kept in Redis, keyed by an opaque token."""

    def __init__(self, redis_client):
        self.redis = redis_client

    @staticmethod
    def _key(token: str) -> str:
        return f"session:{token}"

    async def create_session(self, user_id: str) -> str:
        """Create a session for ``user_id`` and return its token"""
        token = secrets.token_urlsafe(32)

        session_data = {
            "user_id": user_id,
            "created_at": datetime.utcnow().isoformat(),
            "expires_at": (datetime.utcnow() + timedelta(hours=SESSION_EXPIRY_HOURS)).isoformat(),
        }

        # Store in Redis with expiration
        await self.redis.hset(self._key(token), mapping=session_data)
        await self.redis.expire(self._key(token), SESSION_EXPIRY_HOURS * 3600)

        logger.info(f"🔑 Created session for user {user_id}")
        return token

    async def get_session(self, token: str) -> Optional[Dict[str, Any]]:
        """Retrieve session state from Redis"""
        session_data = await self.redis.hgetall(self._key(token))
        if not session_data:
            return None
        return session_data

    async def destroy_session(self, token: str) -> bool:
        deleted = await self.redis.delete(self._key(token))
        return deleted > 0


def _sign(claim: str, value: str) -> str:
    return jwt.encode({claim: value}, SESSION_SECRET, algorithm=SESSION_ALGORITHM)


def _unsign(claim: str, signed: Optional[str]) -> Optional[str]:
    if not signed:
        return None
    try:
        payload = jwt.decode(signed, SESSION_SECRET, algorithms=[SESSION_ALGORITHM])
    except JWTError:
        return None
    return payload.get(claim)


def encode_session_cookie(token: str) -> str:
    """Wrap the opaque session token in a signed value for the browser."""
    return _sign("sid", token)


def decode_session_cookie(value: Optional[str]) -> Optional[str]:
    """Return the session token from a cookie value, or None if it is not ours."""
    return _unsign("sid", value)


def encode_state_cookie(state: str) -> str:
    return _sign("state", state)


def decode_state_cookie(value: Optional[str]) -> Optional[str]:
    return _unsign("state", value)
