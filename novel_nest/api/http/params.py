from typing import Annotated

from fastapi import Path

from novel_nest.core.ids import MAX_ID

# ID в пути; значения вне диапазона INTEGER отклоняются с 422 до обращения к БД
EntityId = Annotated[int, Path(ge=1, le=MAX_ID)]
