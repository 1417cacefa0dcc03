"""JSON:API transport layer: the resource client and its query builder."""

from druxt_menu.client.client import DruxtClient
from druxt_menu.client.query import JsonApiParams

__all__ = ["DruxtClient", "JsonApiParams"]
