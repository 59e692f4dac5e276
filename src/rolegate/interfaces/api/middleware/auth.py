"""Auth middleware - extracts user and role ids from a bearer token."""

from dataclasses import dataclass, field

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    role_ids: list[str] = field(default_factory=list)
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that validates JWT and sets req.context.user (None when unauthenticated)."""

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return

        user = self._keycloak.decode_token(auth[7:])
        if user:
            req.context.user = RequestUser(
                user_id=user.user_id,
                role_ids=list(user.role_ids),
                email=user.email,
                username=user.username,
            )
