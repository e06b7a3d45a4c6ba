from __future__ import annotations

import importlib
from types import ModuleType
from typing import Iterable

from funcbridge.triggers.registry import TriggerRegistry


BUILTIN_TRIGGER_MODULES: tuple[str, ...] = (
    "funcbridge.triggers.http",
    "funcbridge.triggers.timer",
    "funcbridge.triggers.queue",
    "funcbridge.triggers.base",
)


_LOADED = False


def load_builtin_triggers(*, reload: bool = False, extra_modules: Iterable[str] = ()) -> None:
    """Import trigger modules so their decorators register them.

    In production, call with reload=False (default) so imports are cheap.
    In tests, call with reload=True to reset the registry to the built-in
    kinds plus ``extra_modules``.
    """

    global _LOADED

    if reload:
        TriggerRegistry.clear()

    if not _LOADED or reload:
        for module_name in BUILTIN_TRIGGER_MODULES:
            _restore(importlib.import_module(module_name))
        _LOADED = True

    for module_name in extra_modules:
        _restore(importlib.import_module(module_name))


def _restore(module: ModuleType) -> None:
    # Decorators only run on first import; re-register the same class objects
    # so isinstance checks against previously imported names keep working.
    for value in vars(module).values():
        kind = getattr(value, "__trigger_kind__", None)
        if not isinstance(value, type) or not kind or value.__module__ != module.__name__:
            continue
        if TriggerRegistry.try_get(kind) is None:
            TriggerRegistry.register(kind=kind, trigger_class=value)
