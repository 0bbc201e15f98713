"""Resolution of ``module:attribute`` entrypoint strings."""

from __future__ import annotations

import importlib


class EntrypointError(ValueError):
    """Raised when an entrypoint string cannot be resolved."""


def resolve_entrypoint(entrypoint: str) -> object:
    """Import ``module`` and return ``attribute`` (dotted paths allowed)."""
    module_name, separator, attribute = entrypoint.strip().partition(":")
    if not separator or not module_name or not attribute:
        raise EntrypointError(f"Entrypoint {entrypoint!r} must be 'module:attribute'.")

    try:
        target: object = importlib.import_module(module_name)
    except Exception as error:
        raise EntrypointError(f"Failed to import module '{module_name}': {error}") from error

    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as error:
            raise EntrypointError(
                f"Could not find attribute '{attribute}' in '{module_name}'."
            ) from error
    return target
