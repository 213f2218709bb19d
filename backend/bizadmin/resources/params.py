"""The parsed, not yet validated, parameters of one list request."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from starlette.datastructures import QueryParams

ParamValue = str | list[str]


@dataclass(frozen=True)
class QueryRequest:
    search: str | None = None
    filter: str | None = None
    sort: str | None = None
    direction: str | None = None
    page: str | None = None
    per_page: str | None = None
    params: Mapping[str, ParamValue] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_query_params(cls, query_params: QueryParams) -> "QueryRequest":
        """Build from a request's query string.

        Repeated parameters are kept as lists in ``params``; the named
        scalars take the last occurrence.
        """
        params: dict[str, ParamValue] = {}
        for key in query_params.keys():
            values = query_params.getlist(key)
            params[key] = values if len(values) > 1 else values[0]
        return cls.from_mapping(params)

    @classmethod
    def from_mapping(cls, params: Mapping[str, ParamValue]) -> "QueryRequest":
        def scalar(name: str) -> str | None:
            value = params.get(name)
            if isinstance(value, list):
                return value[-1] if value else None
            return value

        return cls(
            search=scalar("search"),
            filter=scalar("filter"),
            sort=scalar("sort"),
            direction=scalar("dir"),
            page=scalar("page"),
            per_page=scalar("per_page"),
            params=MappingProxyType(dict(params)),
        )


def is_blank(value: ParamValue | None) -> bool:
    """Absent, empty string, whitespace-only string, or empty list."""
    if value is None:
        return True
    if isinstance(value, list):
        return all(is_blank(v) for v in value)
    return value.strip() == ""
