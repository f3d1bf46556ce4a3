"""
Route guard for pages that require a logged in user.

The guard is a pure function of the current Session snapshot. While the
session is still being resolved it only ever answers LOADING, so protected
content is never rendered speculatively.
"""

from dataclasses import dataclass
from enum import Enum

from stock_ui.session import Session, SessionStatus

LOGIN_ROUTE = "/login"
PUBLIC_ROUTES = frozenset({LOGIN_ROUTE, "/register"})


class GuardOutcome(str, Enum):
    LOADING = "loading"
    ADMIT = "admit"
    REDIRECT = "redirect"


@dataclass(frozen=True, slots=True)
class GuardDecision:
    """
    What the router should do with a navigation.

    Attributes:
        outcome: Show a placeholder, render the page, or redirect.
        redirect_to: Target route when redirecting.
        replace: Whether the redirect replaces the history entry.
    """

    outcome: GuardOutcome
    redirect_to: str | None = None
    replace: bool = False

    @property
    def admitted(self) -> bool:
        return self.outcome is GuardOutcome.ADMIT


_LOADING = GuardDecision(GuardOutcome.LOADING)
_ADMIT = GuardDecision(GuardOutcome.ADMIT)
_TO_LOGIN = GuardDecision(GuardOutcome.REDIRECT, redirect_to=LOGIN_ROUTE, replace=True)


def guard(session: Session, path: str = "/") -> GuardDecision:
    """
    Decide whether navigation to ``path`` is admitted.

    Public routes are always admitted. For protected routes an unresolved
    session yields LOADING, an authenticated one ADMIT, and anything else
    a history-replacing redirect to the login page.
    """
    if path in PUBLIC_ROUTES:
        return _ADMIT
    if session.status in (SessionStatus.UNKNOWN, SessionStatus.VERIFYING):
        return _LOADING
    if session.status is SessionStatus.AUTHENTICATED:
        return _ADMIT
    return _TO_LOGIN


def page_outcome(session: Session, path: str) -> GuardOutcome:
    """
    Outcome remembered for protected page wrappers after resolving ``path``.

    Public pages never render through a protected wrapper, so visiting one
    leaves LOADING behind. The next protected page then waits for its own
    check instead of reusing an admission granted to a public route.
    """
    if path in PUBLIC_ROUTES:
        return GuardOutcome.LOADING
    return guard(session, path).outcome
