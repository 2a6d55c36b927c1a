"""Authentication collaborator backed by Supabase sessions."""

from .supabase import AuthUser, SessionExpiredError, SupabaseAuthClient
from .dependencies import clear_session_cookies, get_current_user, get_auth_client, session_expired

__all__ = [
    'AuthUser',
    'SessionExpiredError',
    'SupabaseAuthClient',
    'clear_session_cookies',
    'get_current_user',
    'get_auth_client',
    'session_expired',
]
