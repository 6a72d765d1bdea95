"""
Адресация по фрагменту и выбор представления по роли.

Маршруты описаны декларативно в ROUTE_TABLE и сопоставляются одной
функцией match_route; первое совпадение побеждает.
"""
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Pattern, Tuple

from novel_nest.core.ids import MAX_ID_DIGITS, is_valid_id
from novel_nest.domains.identity.schemas import Role, UserResponse

logger = logging.getLogger(__name__)

Listener = Callable[[], None]
Unsubscribe = Callable[[], None]


class View(str, Enum):
    LOGIN = "login"
    HOME = "home"
    WRITER_DASHBOARD = "writer_dashboard"
    ADMIN_DASHBOARD = "admin_dashboard"
    DEVELOPER_DASHBOARD = "developer_dashboard"
    NOVEL_DETAIL = "novel_detail"
    READ_EPISODE = "read_episode"


@dataclass(frozen=True)
class Route:
    view: View
    pattern: Pattern[str]

    def match(self, fragment: str) -> Optional[Dict[str, int]]:
        matched = self.pattern.fullmatch(fragment)
        if matched is None:
            return None
        params = {name: int(value) for name, value in matched.groupdict().items()}
        # Идентификаторы - только положительные целые в диапазоне хранилища
        if not all(is_valid_id(value) for value in params.values()):
            return None
        return params


_ID = r"[0-9]{1,%d}" % MAX_ID_DIGITS


def _route(view: View, template: str) -> Route:
    return Route(view, re.compile(template.format(id=_ID) + r"/?"))


ROUTE_TABLE: Tuple[Route, ...] = (
    _route(View.NOVEL_DETAIL, r"#/novel/(?P<novel_id>{id})"),
    _route(View.READ_EPISODE, r"#/read/(?P<novel_id>{id})/(?P<episode_id>{id})"),
)

ROLE_LANDING: Mapping[Role, View] = {
    Role.READER: View.HOME,
    Role.WRITER: View.WRITER_DASHBOARD,
    Role.ADMIN: View.ADMIN_DASHBOARD,
    Role.DEVELOPER: View.DEVELOPER_DASHBOARD,
}


@dataclass(frozen=True)
class ResolvedView:
    view: View
    params: Mapping[str, int] = field(default_factory=dict)


def novel_href(novel_id: int) -> str:
    return f"#/novel/{novel_id}"


def read_href(novel_id: int, episode_id: int) -> str:
    return f"#/read/{novel_id}/{episode_id}"


def match_route(fragment: str) -> Optional[ResolvedView]:
    """Первый маршрут таблицы, совпавший с фрагментом; иначе None"""
    for route in ROUTE_TABLE:
        params = route.match(fragment or "")
        if params is not None:
            return ResolvedView(route.view, params)
    return None


def resolve_view(user: Optional[UserResponse], fragment: str) -> ResolvedView:
    """Представление для пары (пользователь, адрес).

    Без пользователя - всегда вход. Затем маршруты таблицы, затем
    стартовое представление роли; неизвестная роль ведёт на главную.
    """
    if user is None:
        return ResolvedView(View.LOGIN)

    matched = match_route(fragment)
    if matched is not None:
        return matched

    try:
        role = Role(user.role)
    except ValueError:
        return ResolvedView(View.HOME)
    return ResolvedView(ROLE_LANDING.get(role, View.HOME))


class Location:
    """Текущий адрес-фрагмент с подпиской на изменения"""

    def __init__(self, fragment: str = ""):
        self._fragment = fragment
        self._listeners: List[Listener] = []

    @property
    def fragment(self) -> str:
        return self._fragment

    def navigate(self, fragment: str) -> None:
        if fragment == self._fragment:
            return
        self._fragment = fragment
        for listener in list(self._listeners):
            listener()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None


class ViewRouter:
    """Синхронно пересчитывает представление при смене пользователя или адреса.

    session - любой объект со свойством user и методом subscribe
    (SessionManager); опроса нет, только подписки.
    """

    def __init__(self, session, location: Location):
        self._session = session
        self._location = location
        self._listeners: List[Listener] = []
        self._current = self._resolve()
        self._unsubscribe = [
            session.subscribe(self._reevaluate),
            location.subscribe(self._reevaluate),
        ]

    @property
    def current(self) -> ResolvedView:
        return self._current

    def _resolve(self) -> ResolvedView:
        return resolve_view(self._session.user, self._location.fragment)

    def _reevaluate(self) -> None:
        resolved = self._resolve()
        if resolved == self._current:
            return
        logger.debug(f"View changed: {self._current.view.value} -> {resolved.view.value}")
        self._current = resolved
        for listener in list(self._listeners):
            listener()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def close(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []
