"""Functional options.

An option is a callable that receives an option bag and may read or
overwrite any of its fields. Options are applied in the order the caller
passes them, so a later option observes what earlier ones set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, TypeVar

O = TypeVar("O")

Option = Callable[[O], None]


def apply_options(target: O, options: Iterable[Callable[[O], None]]) -> O:
    for option in options:
        option(target)
    return target


@dataclass
class TriggerOptions:
    """Options for trigger construction."""

    # Binding name of the trigger in function.json. Overrides the kind's
    # default payload key ("req", "timer", "queue").
    name: Optional[str] = None


TriggerOption = Callable[[TriggerOptions], None]


def with_name(name: str) -> TriggerOption:
    """Decode the payload stored under ``name`` instead of the kind's default."""

    def option(o: TriggerOptions) -> None:
        o.name = name

    return option


def new_trigger_options(*options: TriggerOption) -> TriggerOptions:
    return apply_options(TriggerOptions(), options)
