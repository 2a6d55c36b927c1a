"""Client for resolving Supabase access tokens into users."""

import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional

import requests

from ..config.auth import SupabaseAuthConfig

logger = logging.getLogger(__name__)

@dataclass
class AuthUser:
    """The signed-in user behind a session."""
    id: str
    email: Optional[str] = None

class SessionExpiredError(Exception):
    """Raised when Supabase rejects the access token."""
    pass

class SupabaseAuthClient:
    """Looks up users through the Supabase auth REST API."""

    def __init__(self, config: Optional[SupabaseAuthConfig] = None):
        self.config = config or SupabaseAuthConfig()

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        """
        Fetch the user that owns an access token.

        Args:
            access_token: Supabase session access token

        Returns:
            AuthUser, or None if the user could not be resolved

        Raises:
            SessionExpiredError: If Supabase answers 401 for the token
            ValueError: If Supabase is not configured
        """
        self.config.validate()

        try:
            response = requests.get(
                self.config.user_endpoint,
                headers={
                    'apikey': self.config.anon_key,
                    'Authorization': f'Bearer {access_token}',
                },
                timeout=self.config.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to reach Supabase auth: {e}")
            return None

        if response.status_code == 401:
            raise SessionExpiredError("Supabase rejected the access token")
        if not response.ok:
            logger.warning(f"Supabase auth returned {response.status_code}")
            return None

        try:
            return self._convert_to_user(response.json())
        except ValueError as e:
            logger.warning(f"Invalid user payload from Supabase: {e}")
            return None

    def _convert_to_user(self, data: Dict[str, Any]) -> AuthUser:
        """
        Convert a Supabase user payload into an AuthUser.

        Raises:
            ValueError: If the payload has no user id
        """
        if not isinstance(data, dict) or not data.get('id'):
            raise ValueError("User payload is missing an id")
        return AuthUser(id=data['id'], email=data.get('email'))
