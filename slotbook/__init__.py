"""SlotBook - provider availability and appointment booking coordinator."""

import importlib as _importlib
from typing import TYPE_CHECKING, Any

__version__ = "1.0.0"
__license__ = "MIT"

if TYPE_CHECKING:
    from .core.config.settings import get_settings as get_settings
    from .core.logger import setup_structured_logging as setup_structured_logging
    from .services.api.client import BackendApiClient as BackendApiClient
    from .services.booking.coordinator import BookingCoordinator as BookingCoordinator

# Explicit lazy-loading map: name -> (module_path, attribute_name)
_LAZY_MODULE_MAP = {
    # Core
    "get_settings": ("slotbook.core.config.settings", "get_settings"),
    "setup_structured_logging": ("slotbook.core.logger", "setup_structured_logging"),
    # Services
    "BackendApiClient": ("slotbook.services.api.client", "BackendApiClient"),
    "BookingCoordinator": ("slotbook.services.booking.coordinator", "BookingCoordinator"),
}

__all__ = list(_LAZY_MODULE_MAP.keys())


def __getattr__(name: str) -> Any:
    """Lazy import with explicit mapping - importlib based."""
    if name in _LAZY_MODULE_MAP:
        module_path, attr_name = _LAZY_MODULE_MAP[name]
        module = _importlib.import_module(module_path)
        attr = getattr(module, attr_name)
        # Cache in module globals to avoid repeated imports
        globals()[name] = attr
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
