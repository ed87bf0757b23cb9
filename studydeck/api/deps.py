import logging
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.responses import RedirectResponse
from pymongo.errors import PyMongoError
from redis.exceptions import RedisError

from studydeck.core.config import SESSION_COOKIE_NAME
from studydeck.core.database import get_db, get_redis
from studydeck.models.user import User
from studydeck.repositories.user_repository import UserRepository
from studydeck.services.session_manager import SessionManager, decode_session_cookie

logger = logging.getLogger(__name__)


class NotAuthenticated(Exception):
    """Raised by protected routes when the request carries no valid session."""


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


async def resolve_principal(cookie_value: Optional[str], db, redis_client) -> Optional[User]:
    """Map a session cookie to the logged-in user, or None.

    A forged cookie, an expired session and a deleted user all resolve to
    None; so does a store outage, which is logged.
    """
    token = decode_session_cookie(cookie_value)
    if not token:
        return None
    try:
        session = await SessionManager(redis_client).get_session(token)
        if not session:
            return None
        return await UserRepository(db).find_by_id(session.get("user_id"))
    except (RedisError, PyMongoError) as e:
        logger.error(f"Error resolving session: {e}")
        return None


async def get_optional_user(request: Request, db=Depends(get_db), redis_client=Depends(get_redis)) -> Optional[User]:
    return await resolve_principal(request.cookies.get(SESSION_COOKIE_NAME), db, redis_client)


async def require_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise NotAuthenticated()
    return user
