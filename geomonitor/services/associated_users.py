import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from geomonitor.core.config import settings
from geomonitor.db.models.access_point import AccessPoint
from geomonitor.exceptions import ServiceError
from geomonitor.schemas.wisp import AssociatedUser

logger = logging.getLogger(__name__)

SCOPES = ("all", "first")


async def associated_users(
    ap: AccessPoint,
    scope: str = "all",
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[AssociatedUser] | AssociatedUser | None:
    """
    Запрашивает у owmw (сервиса пользователей WISP) список пользователей,
    подключённых к точке доступа.

    Args:
        ap: точка доступа; используется её hostname и реквизиты её WISP.
        scope: "all": список, "first": первый пользователь или None.
        transport: подменяемый транспорт httpx (для тестов).

    Raises:
        ServiceError: WISP не настроен, сервис недоступен или ответил ошибкой.
    """
    if scope not in SCOPES:
        raise ValueError(f"Unknown scope {scope!r}")
    wisp = ap.wisp
    if wisp is None or not wisp.owmw_url:
        raise ServiceError(f"AP {ap.hostname} has no WISP with an owmw endpoint")

    url = f"{wisp.owmw_url.rstrip('/')}/associated_users.json"
    auth = (wisp.owmw_username, wisp.owmw_password) if wisp.owmw_username else None
    try:
        async with httpx.AsyncClient(auth=auth, transport=transport, timeout=settings.OWMW_TIMEOUT) as client:
            resp = await client.get(url, params={"access_point": ap.hostname})
            resp.raise_for_status()
            payload = resp.json()
    except httpx.HTTPError as e:
        logger.error(f"Ошибка запроса associated users для AP {ap.hostname}: {e}")
        raise ServiceError(f"Associated users lookup failed: {e}") from e
    except ValueError as e:
        # 200 с не-JSON телом (страница логина, прокси и т.п.)
        logger.error(f"owmw вернул не JSON для AP {ap.hostname}: {e}")
        raise ServiceError(f"Associated users lookup returned invalid JSON: {e}") from e

    # ActiveResource может вернуть как список, так и {"associated_users": [...]}
    if isinstance(payload, dict):
        payload = payload.get("associated_users", [])
    try:
        users = TypeAdapter(list[AssociatedUser]).validate_python(payload)
    except ValidationError as e:
        logger.error(f"Неожиданный формат ответа owmw для AP {ap.hostname}: {e}")
        raise ServiceError(f"Associated users lookup returned unexpected payload: {e}") from e
    if scope == "first":
        return users[0] if users else None
    return users
