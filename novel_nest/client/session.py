"""
Менеджер сессии: текущий пользователь как явный контейнер состояния.

Состояние меняется только редьюсером по типизированным действиям, а
действия отправляет только SessionManager. Внешней записи в состояние
нет; для оптимистичных обновлений профиля есть update_profile.

Известная особенность: если login завершится после logout, победит
последняя запись, и пользователь снова окажется вошедшим.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from novel_nest.client.data_source import DataSource
from novel_nest.client.navigation import Location
from novel_nest.core.errors import (
    ConflictError, NotFoundError, NovelNestError, TransportError
)
from novel_nest.domains.identity.schemas import UserResponse

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"

LOGIN_FAILED_MESSAGE = "Login failed. Please check your credentials and try again."
SIGNUP_CONFLICT_MESSAGE = "That username or email is already taken."
UNAVAILABLE_MESSAGE = "The service is temporarily unavailable. Please try again."
GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."

Listener = Callable[[], None]
Unsubscribe = Callable[[], None]


class SessionStorage(ABC):
    """Долговременное хранилище вкладки (аналог sessionStorage)"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...


class MemorySessionStorage(SessionStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


@dataclass(frozen=True)
class AuthState:
    user: Optional[UserResponse] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


@dataclass(frozen=True)
class SessionRestored:
    user: UserResponse


@dataclass(frozen=True)
class LoggedIn:
    user: UserResponse


@dataclass(frozen=True)
class LoggedOut:
    pass


@dataclass(frozen=True)
class ProfileUpdated:
    user: UserResponse


AuthAction = Union[SessionRestored, LoggedIn, LoggedOut, ProfileUpdated]


def auth_reducer(state: AuthState, action: AuthAction) -> AuthState:
    """Чистый переход состояния авторизации"""
    if isinstance(action, (SessionRestored, LoggedIn)):
        return AuthState(user=action.user)
    if isinstance(action, LoggedOut):
        return AuthState()
    if isinstance(action, ProfileUpdated):
        # Профиль обновляется только у того же вошедшего пользователя
        if state.user is None or state.user.user_id != action.user.user_id:
            return state
        return AuthState(user=action.user)
    raise TypeError(f"Unknown auth action: {action!r}")


class AuthStore:
    """Контейнер состояния с единственной точкой изменения dispatch"""

    def __init__(self, state: Optional[AuthState] = None):
        self._state = state or AuthState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def dispatch(self, action: AuthAction) -> AuthState:
        new_state = auth_reducer(self._state, action)
        if new_state != self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener()
        return self._state

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None


def failure_message(error: Optional[NovelNestError]) -> str:
    """Сообщение для пользователя; не раскрывает, что именно было неверно"""
    if isinstance(error, NotFoundError):
        return LOGIN_FAILED_MESSAGE
    if isinstance(error, ConflictError):
        return SIGNUP_CONFLICT_MESSAGE
    if isinstance(error, TransportError):
        return UNAVAILABLE_MESSAGE
    return GENERIC_FAILURE_MESSAGE


class SessionManager:
    """Текущий пользователь одной сессии браузера.

    login/signup/logout - единственные способы сменить пользователя.
    Сбои login и signup не выходят наружу: возвращается None, причина
    сохраняется в last_error и пишется в лог.
    """

    def __init__(
        self,
        data_source: DataSource,
        storage: Optional[SessionStorage] = None,
        location: Optional[Location] = None,
    ):
        self._data_source = data_source
        self._storage = storage if storage is not None else MemorySessionStorage()
        self._location = location if location is not None else Location()
        self._store = AuthStore()
        self.last_error: Optional[NovelNestError] = None
        self._restore()

    @property
    def state(self) -> AuthState:
        return self._store.state

    @property
    def user(self) -> Optional[UserResponse]:
        return self._store.state.user

    @property
    def location(self) -> Location:
        return self._location

    def subscribe(self, listener: Listener) -> Unsubscribe:
        return self._store.subscribe(listener)

    def _restore(self) -> None:
        """Однократное восстановление пользователя из хранилища"""
        raw = self._storage.get_item(SESSION_USER_KEY)
        if not raw:
            return
        try:
            user = UserResponse.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable stored session: {e.error_count()} error(s)")
            self._storage.remove_item(SESSION_USER_KEY)
            return
        self._store.dispatch(SessionRestored(user))

    def _persist(self, user: UserResponse) -> None:
        self._storage.set_item(SESSION_USER_KEY, user.model_dump_json())

    async def _authenticate(self, operation: str, call) -> Optional[UserResponse]:
        try:
            user = await call
        except NovelNestError as e:
            logger.error(f"{operation} failed: {type(e).__name__}: {e}")
            self.last_error = e
            return None
        except Exception as e:
            logger.exception(f"{operation} failed unexpectedly")
            self.last_error = TransportError(str(e))
            return None

        self.last_error = None
        self._store.dispatch(LoggedIn(user))
        self._persist(user)
        return user

    async def login(self, email: str, password: str) -> Optional[UserResponse]:
        return await self._authenticate("Login", self._data_source.login(email, password))

    async def signup(self, username: str, email: str, password: str) -> Optional[UserResponse]:
        return await self._authenticate("Signup", self._data_source.signup(username, email, password))

    def logout(self) -> None:
        self._store.dispatch(LoggedOut())
        self._storage.remove_item(SESSION_USER_KEY)
        self._data_source.clear_credentials()
        self._location.navigate("")

    def update_profile(self, user: UserResponse) -> bool:
        """Оптимистичное обновление профиля вошедшего пользователя"""
        current = self.user
        if current is None or current.user_id != user.user_id:
            logger.warning("Rejected profile update for a user that is not logged in")
            return False
        self._store.dispatch(ProfileUpdated(user))
        self._persist(user)
        return True
