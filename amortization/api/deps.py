"""FastAPI dependency injection."""

from fastapi import Query

from amortization.config import Settings, settings
from amortization.engine.errors import InputValidationError


def get_settings() -> Settings:
    return settings


class TableQuery:
    """Sort and filter options for the table view.

    Filters are repeated `filter=column:value` query parameters.
    """

    def __init__(
        self,
        sort: str | None = Query(None, description="Column to sort by"),
        direction: str | None = Query("asc", description="asc or desc"),
        filter: list[str] = Query([], description="column:value, repeatable"),
    ):
        self.sort = sort
        self.direction = direction
        self.filters: dict[str, str] = {}
        for item in filter:
            column, sep, value = item.partition(":")
            if not sep:
                raise InputValidationError(f"Filter must look like column:value, got {item!r}")
            self.filters[column.strip()] = value
