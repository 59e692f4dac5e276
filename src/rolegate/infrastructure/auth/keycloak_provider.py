"""Keycloak OIDC provider for JWT validation."""

import logging
from dataclasses import dataclass, field
from typing import Any

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token."""

    user_id: str
    email: str | None
    username: str | None
    role_ids: list[str] = field(default_factory=list)


def extract_claim(token_info: dict[str, Any], path: str) -> list[str]:
    """Read a list of strings from a dotted claim path, empty when absent."""
    value: Any = token_info
    for part in path.split("."):
        if not isinstance(value, dict):
            return []
        value = value.get(part)
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


class KeycloakProvider:
    """Keycloak OIDC - validates JWT and extracts user info."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        roles_claim: str = "realm_access.roles",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._roles_claim = roles_claim

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect JWT, return user info or None when inactive or invalid."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
            role_ids=extract_claim(token_info, self._roles_claim),
        )
