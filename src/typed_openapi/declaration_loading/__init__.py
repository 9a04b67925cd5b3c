"""Declaration loading exports."""

from .module_loader import DeclarationLoadError, load_api_declaration

__all__ = ["DeclarationLoadError", "load_api_declaration"]
