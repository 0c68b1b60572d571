"""Static registry of Catalyst feature modules.

``MODULES`` fixes both the prompt order and the execution order. Selections
are always replayed in this order, whatever order the keys were given in.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import UnknownModuleError
from .absinthe import AbsintheModule
from .alpine import AlpineModule
from .auth import AuthModule
from .base import (
    Failure,
    FeatureModule,
    ModuleDescriptor,
    ProjectContext,
    SetupOutcome,
    Success,
)
from .bodyguard import BodyguardModule
from .credo import CredoModule
from .dialyxir import DialyxirModule
from .docker import DockerModule
from .ex_machina import ExMachinaModule
from .httpoison import HttpoisonModule
from .liveview import LiveViewModule
from .oban import ObanModule
from .swoosh import SwooshModule
from .waffle import WaffleModule

MODULE_CLASSES: tuple[type[FeatureModule], ...] = (
    ObanModule,
    AuthModule,
    LiveViewModule,
    BodyguardModule,
    AbsintheModule,
    WaffleModule,
    HttpoisonModule,
    SwooshModule,
    ExMachinaModule,
    CredoModule,
    DialyxirModule,
    AlpineModule,
    DockerModule,
)


def build_registry(
    classes: Iterable[type[FeatureModule]] = MODULE_CLASSES,
) -> tuple[ModuleDescriptor, ...]:
    """Instantiate *classes* into descriptors, rejecting duplicate keys."""
    descriptors = tuple(ModuleDescriptor.for_module(cls()) for cls in classes)
    seen: set[str] = set()
    for descriptor in descriptors:
        if descriptor.key in seen:
            raise ValueError(f"Duplicate module key: {descriptor.key}")
        seen.add(descriptor.key)
    return descriptors


MODULES: tuple[ModuleDescriptor, ...] = build_registry()


def module_keys() -> list[str]:
    return [descriptor.key for descriptor in MODULES]


def get_module(key: str) -> ModuleDescriptor:
    """Return the descriptor registered under *key*.

    Raises:
        UnknownModuleError: No module has that key.
    """
    for descriptor in MODULES:
        if descriptor.key == key:
            return descriptor
    raise UnknownModuleError([key])


def select_modules(keys: Iterable[str]) -> list[ModuleDescriptor]:
    """Return the descriptors for *keys* in registry order.

    Duplicate keys select a module once.

    Raises:
        UnknownModuleError: One or more keys are not registered.  Nothing
            is selected in that case.
    """
    wanted = [key.strip() for key in keys if key.strip()]
    known = set(module_keys())
    unknown = [key for key in dict.fromkeys(wanted) if key not in known]
    if unknown:
        raise UnknownModuleError(unknown)
    return [descriptor for descriptor in MODULES if descriptor.key in wanted]


__all__ = [
    "MODULES",
    "MODULE_CLASSES",
    "Failure",
    "FeatureModule",
    "ModuleDescriptor",
    "ProjectContext",
    "SetupOutcome",
    "Success",
    "build_registry",
    "get_module",
    "module_keys",
    "select_modules",
]
