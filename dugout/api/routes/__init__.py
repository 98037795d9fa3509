"""
API routes - combined router from all domain modules.

Shared infrastructure (limiter) lives here; every sub-router imports what it
needs from this package.
"""

from fastapi import APIRouter
from slowapi import Limiter
from slowapi.util import get_remote_address

from dugout.config import Settings, get_bool_env

# ---------------------------------------------------------------------------
# Shared rate limiter
# ---------------------------------------------------------------------------
# RATE_LIMIT_ENABLED=false (the test suite) swaps the decorator for a no-op
# so the endpoints run undecorated.
RATE_LIMIT_ENABLED = get_bool_env("RATE_LIMIT_ENABLED", True)
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)
if not RATE_LIMIT_ENABLED:

    def no_op_limit(*args, **kwargs):
        """No-op decorator: leaves the endpoint untouched."""
        def decorator(func):
            return func
        return decorator

    limiter.limit = no_op_limit


# slowapi evaluates limit callables without the request, so create_app records
# the auth limit of the settings it was built with here.
_auth_limit = {"value": Settings.auth_rate_limit}


def configure_rate_limits(settings: Settings) -> None:
    _auth_limit["value"] = settings.auth_rate_limit


def auth_rate_limit() -> str:
    """Limit applied to the login and register endpoints."""
    return _auth_limit["value"]


# ---------------------------------------------------------------------------
# Import sub-routers and combine
# ---------------------------------------------------------------------------
from dugout.api.routes.auth import router as auth_router  # noqa: E402
from dugout.api.routes.teams import router as teams_router  # noqa: E402
from dugout.api.routes.players import router as players_router  # noqa: E402
from dugout.api.routes.scouting import router as scouting_router  # noqa: E402
from dugout.api.routes.team_data import router as team_data_router  # noqa: E402

router = APIRouter()
router.include_router(auth_router)
router.include_router(teams_router)
router.include_router(players_router)
router.include_router(scouting_router)
router.include_router(team_data_router)
