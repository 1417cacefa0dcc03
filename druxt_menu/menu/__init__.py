"""Menu retrieval: the facade, its strategies, and the normalized models.

Three backend shapes are supported and all normalize to ``MenuEntity``:
- menu_link_content: core menu link content entities (default)
- jsonapi_menu_items: the JSON:API Menu Items module resource
- decoupled_menus: the Decoupled Menus linkset endpoint (experimental)
"""
