"""druxt-menu — normalized Drupal menu retrieval.

Fetches menu items from a Drupal backend through one of several backend
shapes (core ``menu_link_content`` resources, the JSON:API Menu Items module,
or the Decoupled Menus linkset endpoint) and returns them as one flat,
uniformly shaped list of entities.
"""

__version__ = "0.1.0"

from druxt_menu.errors import ConfigurationError
from druxt_menu.menu.menu import DruxtMenu
from druxt_menu.menu.models import MenuEntity, MenuItemAttributes, MenuLink, MenuResult

__all__ = [
    "ConfigurationError",
    "DruxtMenu",
    "MenuEntity",
    "MenuItemAttributes",
    "MenuLink",
    "MenuResult",
]
