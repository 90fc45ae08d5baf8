"""Assistant orchestration: gateway, command interpreter and assistant service."""

from typing import TYPE_CHECKING

# Define export list explicitly
__all__ = ["AssistantGateway", "AssistantService", "get_assistant_service", "interpret"]

if TYPE_CHECKING:
    from .gateway import AssistantGateway
    from .interpreter import interpret
    from .service import AssistantService, get_assistant_service

_ATTR_MODULES = {
    "AssistantGateway": ".gateway",
    "AssistantService": ".service",
    "get_assistant_service": ".service",
    "interpret": ".interpreter",
}


def __getattr__(name: str):
    """Lazy import pattern so importing one submodule does not pull in the others."""
    if name in _ATTR_MODULES:
        import importlib
        import sys
        module = importlib.import_module(_ATTR_MODULES[name], __name__)
        attr = getattr(module, name)
        # Cache the import in the module namespace
        setattr(sys.modules[__name__], name, attr)
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
