from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    password_hash_rounds: int = 12

    # Размер страницы для подборок новелл (6-12)
    page_size: int = 12

    # Источник данных клиента: фикстуры в памяти или HTTP API
    data_source: Literal["mock", "remote"] = "mock"
    api_base_url: str = "http://localhost:8000"

    seed_demo_data: bool = False
    log_level: str = "INFO"
    sql_echo: bool = False

    # PostgreSQL variables for Docker
    postgres_user: str = ""
    postgres_password: str = ""
    postgres_db: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
