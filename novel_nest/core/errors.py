"""
Таксономия ошибок Novel Nest.

Слой доступа к данным нормализует любые сбои в один из этих видов,
прежде чем они пересекут границу компонента.
"""


class NovelNestError(Exception):
    """Базовая ошибка домена"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(NovelNestError):
    """Сущность отсутствует"""


class ConflictError(NovelNestError):
    """Нарушение уникальности или некорректный ввод"""


class TransportError(NovelNestError):
    """Бэкенд недоступен или ответил непредсказуемо"""


class AuthorizationError(NovelNestError):
    """Пользователь известен, но действие ему запрещено"""
