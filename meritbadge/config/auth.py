"""Supabase authentication configuration."""

import os
from typing import Dict, Any
from dataclasses import dataclass

# Cookies set by the frontend once a Supabase session exists
ACCESS_TOKEN_COOKIE = 'sb-access-token'
REFRESH_TOKEN_COOKIE = 'sb-refresh-token'

@dataclass
class SupabaseAuthConfig:
    """Supabase auth configuration settings."""

    url: str = ""
    anon_key: str = ""
    timeout: int = 10

    def __post_init__(self):
        """Load settings from environment if not provided."""
        if not self.url:
            self.url = os.environ.get('SUPABASE_URL', '')
        if not self.anon_key:
            self.anon_key = os.environ.get('SUPABASE_ANON_KEY', '')
        self.url = self.url.rstrip('/')

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            'url': self.url,
            'anon_key': self.anon_key,
            'timeout': self.timeout,
        }

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.url:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not self.anon_key:
            raise ValueError("SUPABASE_ANON_KEY environment variable is required")
        return True

    @property
    def user_endpoint(self) -> str:
        """GoTrue endpoint returning the user behind an access token."""
        return f"{self.url}/auth/v1/user"
