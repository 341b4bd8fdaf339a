"""
Explicit context objects for the view layer.

``SessionContext`` replaces an ambient "current user" global: it is created at
startup in the loading state, resolved once, and torn down at sign-out. Views
receive it through their constructor and subscribe to user changes so that
no query is issued before an identity exists.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from research_navigator.core.errors import AuthError
from research_navigator.modules.auth.schemas import (
    LoginRequest, OAuthResponse, SignUpRequest, SignUpResponse, TokenResponse
)
from research_navigator.modules.auth.service import AuthService

logger = logging.getLogger(__name__)

UserListener = Callable[[Optional[Dict[str, Any]]], Awaitable[None]]


class SessionContext:
    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service
        self.user: Optional[Dict[str, Any]] = None
        self.access_token: Optional[str] = None
        self.loading = True
        self._listeners: List[UserListener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.user["id"] if self.user else None

    def require_user_id(self) -> str:
        if self.loading or self.user is None:
            raise AuthError("Not signed in")
        return self.user["id"]

    def subscribe(self, listener: UserListener) -> Callable[[], None]:
        """Register a "current user changed" listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _emit(self) -> None:
        for listener in list(self._listeners):
            await listener(self.user)

    async def _set_user(self, user: Optional[Dict[str, Any]], access_token: Optional[str]) -> None:
        changed = (self.user or {}).get("id") != (user or {}).get("id")
        self.user = user
        self.access_token = access_token
        if changed:
            await self._emit()

    async def resolve(self, access_token: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Resolve the startup session from a stored token, if any."""
        self.loading = True
        user = None
        if access_token:
            try:
                user = await asyncio.to_thread(self.auth_service.get_current_user, access_token)
            except AuthError as e:
                logger.info(f"Stored session rejected: {e.message}")
                access_token = None
        self.loading = False
        await self._set_user(user, access_token if user else None)
        return user

    async def sign_in(self, email: str, password: str) -> TokenResponse:
        token = await asyncio.to_thread(
            self.auth_service.sign_in, LoginRequest(email=email, password=password)
        )
        self.loading = False
        await self._set_user({"id": token.user_id, "email": token.email}, token.access_token)
        return token

    async def sign_up(self, signup_data: SignUpRequest) -> SignUpResponse:
        result = await asyncio.to_thread(self.auth_service.sign_up, signup_data)
        self.loading = False
        if result.access_token:
            await self._set_user({"id": result.user_id, "email": result.email}, result.access_token)
        return result

    async def sign_in_with_provider(self, provider: str) -> OAuthResponse:
        return await asyncio.to_thread(self.auth_service.sign_in_with_provider, provider)

    async def sign_out(self) -> None:
        """Tear the session down; listeners see ``None``."""
        await asyncio.to_thread(self.auth_service.sign_out, self.access_token)
        await self._set_user(None, None)


class ThemeContext:
    def __init__(self, dark_mode: bool = False):
        self.dark_mode = dark_mode

    def toggle(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode
