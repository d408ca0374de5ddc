"""Per-client limits on room creation and joining.

Only the two endpoints that add state are limited. Clients are told apart
by remote address. The limits come from ``Settings.create_room_limit`` and
``Settings.join_room_limit``; ``RATE_LIMITING_ENABLED=false`` turns them off.
"""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from factiondraft.settings import get_settings

limiter = Limiter(key_func=get_remote_address)


def room_rate_limit(setting: str) -> Callable[[Request, Response], Awaitable[None]]:
    """Build a route dependency enforcing the limit held in a settings field.

    Args:
        setting: Name of the ``Settings`` field, e.g. ``"join_room_limit"``
    """

    async def hit(request: Request, response: Response) -> None:
        return None

    # slowapi counts per decorated function name
    hit.__name__ = f"{setting}_hit"
    hit = limiter.limit(getattr(get_settings(), setting))(hit)

    async def dependency(request: Request, response: Response) -> None:
        if get_settings().rate_limiting_enabled:
            await hit(request, response)

    return dependency


create_room_rate_limit = room_rate_limit("create_room_limit")
join_room_rate_limit = room_rate_limit("join_room_limit")
