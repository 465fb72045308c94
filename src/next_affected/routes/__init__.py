"""Page classification and route derivation.

Public API::

    from next_affected.routes import is_page, route_from_page

    if is_page(module, project_dir, config):
        route = route_from_page(module, project_dir, config)
"""

from next_affected.routes.pages import is_page, pages_roots, route_from_page

__all__ = [
    "is_page",
    "pages_roots",
    "route_from_page",
]
