# app/middleware/auth_middleware.py
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.core.exceptions import InvalidCredential


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class AuthMiddleware(BaseHTTPMiddleware):
    """Verifies any bearer token and leaves the outcome on ``request.state``.

    Rejection is left to the ``get_current_claims`` dependency so public
    routes are unaffected.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.token_present = False
        request.state.claims = None
        request.state.auth_error = None

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token:
            request.state.token_present = True
            try:
                request.state.claims = request.app.state.tokens.verify(token)
            except InvalidCredential as e:
                request.state.auth_error = e
        response = await call_next(request)
        return response
