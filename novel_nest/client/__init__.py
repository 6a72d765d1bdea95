from novel_nest.client.data_source import DataSource
from novel_nest.client.mock import MockDataSource
from novel_nest.client.remote import RemoteDataSource


def create_data_source(mode: str, base_url: str = "", page_size: int = 12, **kwargs) -> DataSource:
    """Источник данных по настройке DATA_SOURCE"""
    if mode == "mock":
        return MockDataSource(page_size=page_size, **kwargs)
    if mode == "remote":
        return RemoteDataSource(base_url, page_size=page_size, **kwargs)
    raise ValueError(f"Unknown data source: {mode}")


__all__ = [
    "DataSource",
    "MockDataSource",
    "RemoteDataSource",
    "create_data_source"
]
