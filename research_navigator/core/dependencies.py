"""
Core dependencies for route protection and per-user Supabase clients
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from research_navigator.core.errors import AuthError
from research_navigator.database.supabase_client import SupabaseClient, get_supabase
from research_navigator.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Resolve the bearer token to the signed-in user"""
    return auth_service.get_current_user(token)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Dict[str, Any]]:
    """Signed-in user, or None for anonymous requests and rejected tokens"""
    if credentials is None:
        return None
    try:
        return auth_service.get_current_user(credentials.credentials)
    except AuthError as e:
        logger.info(f"Treating request as anonymous: {e.message}")
        return None


def get_user_supabase(token: str = Depends(get_current_token)) -> Client:
    """Supabase client carrying the caller's JWT so row-level security applies"""
    return SupabaseClient.for_user(token)
