"""Module options for druxt-menu.

Options arrive as plain mappings (usually the ``druxt`` section of a YAML
file, written in the camelCase used by Druxt's Nuxt module) and are resolved
once into :class:`ModuleOptions`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from druxt_menu.client.client import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT
from druxt_menu.errors import ConfigurationError

MENU_LINK_CONTENT = "menu_link_content"
JSONAPI_MENU_ITEMS = "jsonapi_menu_items"
DECOUPLED_MENUS = "decoupled_menus"

MENU_TYPES = (MENU_LINK_CONTENT, JSONAPI_MENU_ITEMS, DECOUPLED_MENUS)
DEFAULT_MENU_TYPE = MENU_LINK_CONTENT

ENV_BASE_URL = "DRUXT_BASE_URL"
ENV_MENU_TYPE = "DRUXT_MENU_TYPE"

# Legacy boolean switch, accepted in both spellings.
_LEGACY_FLAGS = ("jsonApiMenuItems", "json_api_menu_items")


@dataclass
class MenuOptions:
    type: str = DEFAULT_MENU_TYPE


@dataclass
class ModuleOptions:
    """Resolved module options."""

    endpoint: str = DEFAULT_ENDPOINT
    menu: MenuOptions = field(default_factory=MenuOptions)
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT


def resolve_options(options: Union[ModuleOptions, dict, None] = None) -> ModuleOptions:
    """Merge user *options* over the defaults.

    The legacy ``menu.jsonApiMenuItems`` flag is translated to
    ``menu.type = "jsonapi_menu_items"`` before merging. The ``menu`` section
    is merged key by key, so a section without ``type`` keeps the default.
    The input mapping is never modified.
    """
    if isinstance(options, ModuleOptions):
        return options

    options = dict(options or {})
    menu = dict(options.get("menu") or {})

    if any(menu.get(flag) for flag in _LEGACY_FLAGS):
        menu["type"] = JSONAPI_MENU_ITEMS

    resolved = ModuleOptions(menu=MenuOptions(type=menu.get("type") or DEFAULT_MENU_TYPE))
    if options.get("endpoint"):
        resolved.endpoint = options["endpoint"]
    if options.get("headers"):
        resolved.headers = dict(options["headers"])
    if options.get("timeout") is not None:
        resolved.timeout = float(options["timeout"])
    return resolved


def load_config(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML configuration file.

    Accepts either a top-level ``druxt:`` section or a bare mapping and
    returns the raw option mapping (including ``baseUrl`` when present).
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    section = data.get("druxt", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'druxt' section in {path} must be a mapping")
    return section


def base_url_from_env() -> Optional[str]:
    return os.environ.get(ENV_BASE_URL) or None


def menu_type_from_env() -> Optional[str]:
    return os.environ.get(ENV_MENU_TYPE) or None
