import logging

from fastapi import APIRouter, Depends, Request
from pymongo.errors import PyMongoError
from redis.exceptions import RedisError

from studydeck.api.deps import redirect
from studydeck.core.config import (
    OAUTH_STATE_COOKIE_NAME,
    OAUTH_STATE_MAX_AGE,
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
    SESSION_EXPIRY_HOURS,
)
from studydeck.core.database import get_db, get_redis
from studydeck.repositories.user_repository import UserRepository
from studydeck.services.identity_provider import IdentityProviderError, get_identity_provider
from studydeck.services.session_manager import (
    SessionManager,
    decode_session_cookie,
    decode_state_cookie,
    encode_session_cookie,
    encode_state_cookie,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/google", summary="Start the Google login flow")
async def login_with_google(provider=Depends(get_identity_provider)):
    url, state = provider.create_authorization_url()
    response = redirect(url)
    response.set_cookie(
        OAUTH_STATE_COOKIE_NAME,
        encode_state_cookie(state),
        max_age=OAUTH_STATE_MAX_AGE,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/google/callback", summary="Complete the Google login flow")
async def google_callback(
    request: Request,
    provider=Depends(get_identity_provider),
    db=Depends(get_db),
    redis_client=Depends(get_redis),
):
    code = request.query_params.get("code")
    state = request.query_params.get("state")
    expected_state = decode_state_cookie(request.cookies.get(OAUTH_STATE_COOKIE_NAME))

    if not code or not state or state != expected_state:
        logger.warning("Rejected Google callback: missing code or state mismatch")
        return _failed_login()

    try:
        profile = await provider.fetch_profile(code)
        user = await UserRepository(db).find_or_create(profile)
        token = await SessionManager(redis_client).create_session(user.id)
    except IdentityProviderError as e:
        logger.error(f"Identity provider error: {e}")
        return _failed_login()
    except (PyMongoError, RedisError) as e:
        logger.error(f"Error completing login: {e}")
        return _failed_login()

    logger.info(f"✅ User {user.id} logged in")
    response = redirect("/dashboard")
    response.delete_cookie(OAUTH_STATE_COOKIE_NAME)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        encode_session_cookie(token),
        max_age=SESSION_EXPIRY_HOURS * 3600,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/logout", summary="Log out and destroy the session")
async def logout(request: Request, redis_client=Depends(get_redis)):
    token = decode_session_cookie(request.cookies.get(SESSION_COOKIE_NAME))
    if token:
        try:
            await SessionManager(redis_client).destroy_session(token)
        except RedisError as e:
            logger.error(f"Error destroying session: {e}")

    response = redirect("/")
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


def _failed_login():
    response = redirect("/")
    response.delete_cookie(OAUTH_STATE_COOKIE_NAME)
    return response
