"""
Runtime token claims package.

The workflow runtime token is issued by the results backend itself, so its
signature is not verified here; only its structure and the
``Actions.Results`` scope are checked.
"""

from .backend_ids import BackendIds, get_backend_ids_from_token

__all__ = ["BackendIds", "get_backend_ids_from_token"]
