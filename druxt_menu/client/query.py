"""JSON:API query builder using Drupal's bracket-notation parameters.

Example::

    query = (
        JsonApiParams()
        .add_filter("enabled", "1")
        .add_filter("menu_name", "main")
        .add_fields("menu_link_content--menu_link_content", ["title", "weight"])
    )
    query.get_query_object()
    # {"filter[enabled]": "1", "filter[menu_name]": "main",
    #  "fields[menu_link_content--menu_link_content]": "title,weight"}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import httpx


@dataclass
class FilterCondition:
    """A single ``filter`` entry."""

    path: str
    value: Union[str, list[str]]
    operator: str = "="


@dataclass
class JsonApiParams:
    """Fluent builder for Drupal JSON:API query parameters."""

    filters: list[FilterCondition] = field(default_factory=list)
    fields: dict[str, list[str]] = field(default_factory=dict)
    includes: list[str] = field(default_factory=list)
    sorts: list[str] = field(default_factory=list)
    page_limit: int | None = None

    def add_filter(self, path: str, value, operator: str = "=") -> JsonApiParams:
        """Add a filter condition.

        List or tuple values (for ``IN``, ``NOT IN``, ``BETWEEN``) are kept as
        lists; anything else is stringified.
        """
        if isinstance(value, (list, tuple)):
            value = [str(v) for v in value]
        else:
            value = str(value)
        self.filters.append(FilterCondition(path=path, value=value, operator=operator))
        return self

    def add_fields(self, resource_type: str, fields: list[str]) -> JsonApiParams:
        self.fields[resource_type] = list(fields)
        return self

    def add_include(self, fields: list[str]) -> JsonApiParams:
        for name in fields:
            if name not in self.includes:
                self.includes.append(name)
        return self

    def add_sort(self, path: str, direction: str = "ASC") -> JsonApiParams:
        self.sorts.append(f"-{path}" if direction.upper() == "DESC" else path)
        return self

    def add_page_limit(self, limit: int) -> JsonApiParams:
        self.page_limit = limit
        return self

    # -- rendering -----------------------------------------------------------

    def get_query_object(self) -> dict[str, Union[str, list[str]]]:
        """Return the parameter mapping sent on the request.

        A plain equality filter uses the short form ``filter[path]=value``.
        Other operators, list values and repeated paths expand to condition
        groups named after the path, suffixed ``_2``, ``_3``... when the name
        is already taken. List values render as repeated ``[value][]``
        entries.
        """
        params: dict[str, Union[str, list[str]]] = {}
        groups: set[str] = set()

        for condition in self.filters:
            short_key = f"filter[{condition.path}]"
            if (
                condition.operator == "="
                and isinstance(condition.value, str)
                and condition.path not in groups
            ):
                params[short_key] = condition.value
                groups.add(condition.path)
                continue

            group = condition.path
            suffix = 2
            while group in groups:
                group = f"{condition.path}_{suffix}"
                suffix += 1
            groups.add(group)

            prefix = f"filter[{group}][condition]"
            params[f"{prefix}[path]"] = condition.path
            if isinstance(condition.value, list):
                params[f"{prefix}[value][]"] = condition.value
            else:
                params[f"{prefix}[value]"] = condition.value
            params[f"{prefix}[operator]"] = condition.operator

        for resource_type, names in self.fields.items():
            params[f"fields[{resource_type}]"] = ",".join(names)

        if self.includes:
            params["include"] = ",".join(self.includes)
        if self.sorts:
            params["sort"] = ",".join(self.sorts)
        if self.page_limit is not None:
            params["page[limit]"] = str(self.page_limit)

        return params

    def get_query_string(self) -> str:
        return str(httpx.QueryParams(self.get_query_object()))
