import logging
from datetime import date
from typing import Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from research_navigator.core.errors import NavigatorError
from research_navigator.modules.auth.schemas import SignUpRequest
from research_navigator.views.base import PageView, serialized
from research_navigator.views.navigation import HOME_PATH, LOGIN_PATH

logger = logging.getLogger(__name__)


def _first_error(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    field = ".".join(str(p) for p in errors[0].get("loc", ()))
    return f"{field}: {errors[0]['msg']}" if field else errors[0]["msg"]


class AuthPage(PageView):
    """Login / sign-up screen. Successful calls return the path to navigate to."""

    @serialized
    async def login(self, email: str, password: str) -> Optional[str]:
        try:
            await self.session.sign_in(email, password)
        except PydanticValidationError as e:
            self.notifier.error(_first_error(e))
            return None
        except NavigatorError as e:
            self.notifier.error(e.message)
            return None
        return HOME_PATH

    @serialized
    async def signup(
        self,
        email: str,
        password: str,
        name: str = "",
        dob: Optional[date] = None,
        currently_pursuing: str = "",
        interests: Iterable[str] = (),
        phone: str = "",
    ) -> Optional[str]:
        try:
            request = SignUpRequest(
                email=email,
                password=password,
                name=name,
                dob=dob,
                currently_pursuing=currently_pursuing,
                interests=list(interests),
                phone=phone,
            )
            await self.session.sign_up(request)
        except PydanticValidationError as e:
            self.notifier.error(_first_error(e))
            return None
        except NavigatorError as e:
            self.notifier.error(e.message)
            return None
        return HOME_PATH

    @serialized
    async def continue_with_provider(self, provider: str = "google") -> Optional[str]:
        """Returns the provider URL to open"""
        try:
            response = await self.session.sign_in_with_provider(provider)
        except NavigatorError as e:
            self.notifier.error(e.message)
            return None
        return response.url

    @serialized
    async def sign_out(self) -> Optional[str]:
        try:
            await self.session.sign_out()
        except NavigatorError as e:
            logger.error(f"Sign-out failed: {e.message}")
            self.notifier.error("Error logging out")
            return None
        return LOGIN_PATH
