import hashlib
import logging
import time
from supabase import Client
from research_navigator.config import settings
from research_navigator.core.errors import AuthError
from research_navigator.database.supabase_client import SupabaseClient
from research_navigator.modules.auth.schemas import (
    LoginRequest, SignUpRequest, TokenResponse, SignUpResponse, OAuthResponse
)
from research_navigator.modules.profiles.service import ProfileService
from typing import Callable, Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user; every API request re-validates its bearer token
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(
        self,
        supabase: Client,
        user_client_factory: Optional[Callable[[str], Client]] = None
    ):
        self.supabase = supabase
        self.user_client_factory = user_client_factory or SupabaseClient.for_user

    def sign_up(self, signup_data: SignUpRequest) -> SignUpResponse:
        """Register with Supabase Auth, then create the user's profile row"""
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": signup_data.email,
                "password": signup_data.password,
                "options": {
                    "data": {"name": signup_data.name} if signup_data.name else {}
                }
            })
        except Exception as e:
            logger.error(f"Sign-up failed for {signup_data.email}: {e}")
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise AuthError("User already exists") from e
            raise AuthError(f"Registration failed: {error_message}") from e

        if not auth_response.user:
            raise AuthError("Failed to register user")

        user = auth_response.user
        session = auth_response.session
        access_token = session.access_token if session else None
        client = self.user_client_factory(access_token) if access_token else self.supabase

        # profile creation errors propagate as RemoteWriteError
        profile = ProfileService(client).create_profile(user.id, signup_data.to_profile())
        logger.info(f"Registered user {user.id} with profile {profile.id}")

        return SignUpResponse(
            user_id=user.id,
            email=user.email or signup_data.email,
            access_token=access_token,
            profile=profile,
            redirect_to="/",
            message="User registered successfully"
        )

    def sign_in(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate with email and password"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            logger.error(f"Sign-in failed for {login_data.email}: {e}")
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise AuthError("Invalid email or password") from e
            raise AuthError(f"Login failed: {error_message}") from e

        if not auth_response.user or not auth_response.session:
            raise AuthError("Invalid credentials")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            refresh_token=auth_response.session.refresh_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or login_data.email
        )

    def sign_in_with_provider(self, provider: str, redirect_to: Optional[str] = None) -> OAuthResponse:
        """Start federated sign-in; the caller sends the browser to the returned URL"""
        credentials: Dict[str, Any] = {"provider": provider}
        redirect_to = redirect_to or settings.oauth_redirect_url
        if redirect_to:
            credentials["options"] = {"redirect_to": redirect_to}
        try:
            response = self.supabase.auth.sign_in_with_oauth(credentials)
        except Exception as e:
            logger.error(f"OAuth sign-in with {provider} failed: {e}")
            raise AuthError(f"Sign-in with {provider} failed: {e}") from e

        if not response or not response.url:
            raise AuthError(f"Sign-in with {provider} failed")
        return OAuthResponse(provider=provider, url=response.url)

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a JWT to the user. Uses a short TTL cache to reduce auth API calls."""
        cache_key = _cache_key(token)
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            logger.warning(f"Token validation failed: {error_msg}")
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise AuthError("Invalid or expired token") from e
            raise AuthError("Authentication failed") from e

        if not user_response or not user_response.user:
            raise AuthError("Invalid or expired token")

        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "created_at": user.created_at,
        }
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
        return user_data

    def sign_out(self, token: Optional[str] = None) -> None:
        """Sign out and forget the cached identity for ``token``"""
        if token:
            _AUTH_USER_CACHE.pop(_cache_key(token), None)
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.error(f"Sign-out failed: {e}")
            raise AuthError(f"Error logging out: {e}") from e
