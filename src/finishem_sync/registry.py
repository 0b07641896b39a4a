"""Decorator-based plugin registry for extractors, selectors, and dispatchers.

Concrete classes register themselves at import time via decorators like
``@register_dispatcher("finish_em_graphql")``.  The engine resolves string
keys from config to classes via ``get_dispatcher("finish_em_graphql")`` —
it never imports a concrete class directly.
"""

from __future__ import annotations

_extractor_registry: dict[str, type] = {}
_selector_registry: dict[str, type] = {}
_dispatcher_registry: dict[str, type] = {}


# ---------------------------------------------------------------------------
# Decorator factories
# ---------------------------------------------------------------------------

def _register(registry: dict[str, type], kind: str, name: str):
    def decorator(cls: type) -> type:
        if name in registry:
            raise ValueError(
                f"Duplicate {kind} registration: {name!r} is already "
                f"registered to {registry[name].__name__}"
            )
        registry[name] = cls
        return cls

    return decorator


def register_extractor(name: str):
    """Class decorator that registers an extractor under *name*."""
    return _register(_extractor_registry, "extractor", name)


def register_selector(name: str):
    """Class decorator that registers a selection strategy under *name*."""
    return _register(_selector_registry, "selector", name)


def register_dispatcher(name: str):
    """Class decorator that registers a dispatcher under *name*."""
    return _register(_dispatcher_registry, "dispatcher", name)


# ---------------------------------------------------------------------------
# Getters — used by the engine to resolve config keys → classes
# ---------------------------------------------------------------------------

def _get(registry: dict[str, type], kind: str, name: str) -> type:
    try:
        return registry[name]
    except KeyError:
        available = ", ".join(sorted(registry)) or "(none)"
        raise KeyError(f"Unknown {kind} {name!r}. Available: {available}") from None


def get_extractor(name: str) -> type:
    """Return the extractor class registered under *name*."""
    return _get(_extractor_registry, "extractor", name)


def get_selector(name: str) -> type:
    """Return the selector class registered under *name*."""
    return _get(_selector_registry, "selector", name)


def get_dispatcher(name: str) -> type:
    """Return the dispatcher class registered under *name*."""
    return _get(_dispatcher_registry, "dispatcher", name)


def list_registered() -> dict[str, dict[str, str]]:
    """Return all registered modules grouped by category.

    Returns a dict like::

        {
            "extractors":  {"checklist": "ChecklistExtractor"},
            "selectors":   {"all": "AcceptAllSelector", ...},
            "dispatchers": {"finish_em_graphql": "GraphQLDispatcher", ...},
        }
    """
    return {
        "extractors": {k: v.__name__ for k, v in sorted(_extractor_registry.items())},
        "selectors": {k: v.__name__ for k, v in sorted(_selector_registry.items())},
        "dispatchers": {k: v.__name__ for k, v in sorted(_dispatcher_registry.items())},
    }
