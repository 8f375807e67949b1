"""Result unwrapping and HTTP error mapping for notation routes."""

from interfaces.api.middleware.error_handler import handle_use_case_errors

__all__ = ["handle_use_case_errors"]
