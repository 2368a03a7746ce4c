from .generator import DEFAULT_FORMAT, action_to_fragment, generate, generate_file
from .locators import resolve_locator
from .renderers import RENDERERS, get_renderer

__all__ = [
    "DEFAULT_FORMAT",
    "RENDERERS",
    "action_to_fragment",
    "generate",
    "generate_file",
    "get_renderer",
    "resolve_locator",
]
