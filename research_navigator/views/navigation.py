from dataclasses import dataclass
from typing import Optional

from research_navigator.core.session import SessionContext

LOGIN_PATH = "/login"
HOME_PATH = "/"

PROTECTED_PATHS = frozenset({"/", "/tagged", "/history", "/settings"})
PUBLIC_ONLY_PATHS = frozenset({"/login", "/signup", "/landing"})


@dataclass(frozen=True)
class RouteDecision:
    path: str
    redirected: bool = False
    waiting: bool = False  # session still loading; show a spinner


def decide_route(path: str, authenticated: bool, loading: bool = False) -> RouteDecision:
    """Apply the route guards to ``path``."""
    if path not in PROTECTED_PATHS and path not in PUBLIC_ONLY_PATHS:
        return RouteDecision(path=HOME_PATH, redirected=True)
    if loading:
        return RouteDecision(path=path, waiting=True)
    if path in PROTECTED_PATHS and not authenticated:
        return RouteDecision(path=LOGIN_PATH, redirected=True)
    if path in PUBLIC_ONLY_PATHS and authenticated:
        return RouteDecision(path=HOME_PATH, redirected=True)
    return RouteDecision(path=path)


def resolve_route(path: str, session: Optional[SessionContext]) -> RouteDecision:
    if session is None:
        return decide_route(path, authenticated=False)
    return decide_route(path, authenticated=session.is_authenticated, loading=session.loading)
