# Идентификаторы хранятся в INTEGER (int4 в PostgreSQL)
MAX_ID = 2**31 - 1
MAX_ID_DIGITS = len(str(MAX_ID))


def is_valid_id(value: int) -> bool:
    return 0 < value <= MAX_ID
