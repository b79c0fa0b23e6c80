"""Registries: target objects for resolution, and callbacks offered to a model."""

from .callbacks import CallbackRegistry
from .objects import ObjectRegistry, Registry

__all__ = ["Registry", "ObjectRegistry", "CallbackRegistry"]
