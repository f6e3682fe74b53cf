import uuid
from fastapi import Cookie, Header, Response
from app.core.config import get_settings

SESSION_COOKIE = "session_id"


async def resolve_session_id(
    response: Response,
    x_session_id: str | None = Header(default=None),
    session_id: str | None = Cookie(default=None),
) -> str:
    """
    Dependency resolving the per-browser session id.
    - Priority to explicit 'X-Session-Id' header (sent by the storefront SPA).
    - Then the 'session_id' cookie.
    - Otherwise mint a new id and set it as a long-lived cookie.
    The id is passed explicitly to services; nothing reads it from global state.
    """
    if x_session_id and x_session_id.strip():
        return x_session_id.strip()
    if session_id and session_id.strip():
        return session_id.strip()

    settings = get_settings()
    new_id = uuid.uuid4().hex
    response.set_cookie(
        key=SESSION_COOKIE,
        value=new_id,
        max_age=settings.session_cookie_max_age,
        httponly=True,
        samesite="lax",
    )
    return new_id
