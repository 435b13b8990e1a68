from .db import (
    TableRunner,
    RunnerFactory,
    create_engine_from_settings,
    get_database_url,
    runner_factory,
    split_qualified_name,
)

__all__ = [
    "TableRunner",
    "RunnerFactory",
    "create_engine_from_settings",
    "get_database_url",
    "runner_factory",
    "split_qualified_name",
]
