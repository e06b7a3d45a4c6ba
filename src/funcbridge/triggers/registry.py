from __future__ import annotations

from typing import IO, Any, Callable, ClassVar, Dict, List, Optional, Type

from funcbridge.core.exceptions import TriggerRegistryError
from funcbridge.core.options import TriggerOption


class TriggerRegistry:
    _registry: ClassVar[Dict[str, Type[Any]]] = {}

    @classmethod
    def register(
        cls,
        *,
        kind: str,
        trigger_class: Type[Any],
        overwrite: bool = False,
    ) -> None:
        if not overwrite and kind in cls._registry:
            existing = cls._registry[kind]
            raise TriggerRegistryError(f"Trigger already registered for kind={kind!r}: {existing}")
        cls._registry[kind] = trigger_class

    @classmethod
    def get(cls, kind: str) -> Type[Any]:
        try:
            return cls._registry[kind]
        except KeyError as exc:
            raise TriggerRegistryError(f"No trigger registered for kind={kind!r}") from exc

    @classmethod
    def try_get(cls, kind: str) -> Optional[Type[Any]]:
        return cls._registry.get(kind)

    @classmethod
    def kinds(cls) -> List[str]:
        return sorted(cls._registry)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_trigger(*, kind: str, overwrite: bool = False) -> Callable[[Type[Any]], Type[Any]]:
    def decorator(trigger_class: Type[Any]) -> Type[Any]:
        TriggerRegistry.register(kind=kind, trigger_class=trigger_class, overwrite=overwrite)
        trigger_class.__trigger_kind__ = kind
        return trigger_class

    return decorator


def new_trigger(kind: str, stream: IO[bytes], *options: TriggerOption) -> Any:
    """Decode ``stream`` with the trigger class registered for ``kind``."""
    from funcbridge.bootstrap import load_builtin_triggers

    load_builtin_triggers()
    try:
        trigger_class = TriggerRegistry.get(kind)
    except TriggerRegistryError:
        stream.close()
        raise
    return trigger_class.from_stream(stream, *options)
