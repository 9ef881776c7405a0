"""
Utilities shared by the API layer: error translation and logging setup.
"""

from .error_handlers import handle_api_errors, raise_for_result

__all__ = ["handle_api_errors", "raise_for_result"]
