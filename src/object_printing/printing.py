# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Fluent configuration surface over the rule store.

Example:
    ```python
    text = (
        ObjectPrinter.for_(Person)
        .excluding(UUID)
        .excluding_member("height")
        .alternative_for(str).take_only(10)
        .alternative_for_member("age").using(lambda age: f"{age} years")
        .print_to_string(person)
    )

    # One-off configuration for a single object
    text = print_to_string(person, lambda config: config.excluding(int))
    ```
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, Callable, Optional, Type, Union

from babel import Locale

from .core.members import MemberDescriptor, narrow_annotation, resolve_member
from .core.renderer import render
from .core.rules import Formatter, RenderConfig
from .core.settings import RenderSettings
from .formatters import culture_formatter, truncating_formatter

logger = logging.getLogger(__name__)


class PrintingConfig:
    """Printing rules for objects of type ``owner``."""

    def __init__(self, owner: Type, settings: Optional[RenderSettings] = None):
        if not isinstance(owner, type):
            raise ValueError(f"PrintingConfig owner must be a type, got {owner!r}")
        self.owner = owner
        self.config = RenderConfig(settings=settings)
        logger.debug(f"Created printing config for {owner.__name__}")

    def excluding(self, value_type: Any) -> "PrintingConfig":
        """Leave out every member of ``value_type``."""
        self.config.exclude_type(value_type)
        return self

    def excluding_member(self, name: str) -> "PrintingConfig":
        """Leave out the member ``name`` of the owner type."""
        self.config.exclude_member(self.owner, name)
        return self

    def alternative_for(self, value_type: Any) -> "AlternativeConfig":
        """Start a formatting rule for every member of ``value_type``."""
        return AlternativeConfig(self, value_type=value_type)

    def alternative_for_member(self, name: str) -> "AlternativeConfig":
        """Start a formatting rule for the member ``name`` of the owner type."""
        return AlternativeConfig(self, member=resolve_member(self.owner, name))

    def print_to_string(self, obj: Any) -> str:
        return render(obj, self.config)


class AlternativeConfig:
    """
    Pending formatting rule for a type or a single member.

    Each terminal method registers the formatter and returns the parent
    ``PrintingConfig`` so the chain continues.
    """

    def __init__(
        self,
        parent: PrintingConfig,
        value_type: Any = None,
        member: Optional[MemberDescriptor] = None,
    ):
        self.parent = parent
        self.value_type = value_type
        self.member = member

    @property
    def target_type(self) -> Any:
        if self.member is not None:
            return self.member.declared_type
        return narrow_annotation(self.value_type)

    def _describe(self) -> str:
        if self.member is not None:
            return f"member {self.member.owner.__name__}.{self.member.name}"
        return f"type {getattr(self.target_type, '__name__', self.target_type)}"

    def _require_target(self, base: type, rule: str) -> None:
        target = self.target_type
        if target is None:
            return  # undeclared member type
        if not (isinstance(target, type) and issubclass(target, base)):
            raise ValueError(
                f"{rule} applies to {base.__name__} values, not {getattr(target, '__name__', target)!r}"
            )

    def using(self, formatter: Formatter) -> PrintingConfig:
        """Format the target with ``formatter``."""
        config = self.parent.config
        if self.member is not None:
            config.set_member_formatter(self.member.owner, self.member.name, formatter)
        else:
            config.set_type_formatter(self.value_type, formatter)
        return self.parent

    def using_culture(self, locale: Union[str, Locale]) -> PrintingConfig:
        """Format numeric values with the decimal separator of ``locale``."""
        self._require_target(numbers.Number, "using_culture")
        logger.debug(f"Formatting {self._describe()} with locale {locale}")
        return self.using(culture_formatter(locale))

    def take_only(self, max_length: int) -> PrintingConfig:
        """Keep only the first ``max_length`` characters of text values."""
        self._require_target(str, "take_only")
        logger.debug(f"Truncating {self._describe()} to {max_length} characters")
        return self.using(truncating_formatter(max_length))


class ObjectPrinter:
    """Entry point for building a ``PrintingConfig``."""

    @staticmethod
    def for_(owner: Type) -> PrintingConfig:
        return PrintingConfig(owner)


def print_to_string(
    obj: Any, configure: Optional[Callable[[PrintingConfig], Any]] = None
) -> str:
    """
    Render ``obj`` with rules built for its runtime type.

    Args:
        obj: Object to render
        configure: Optional callback that adds rules to the ``PrintingConfig``

    Returns:
        The rendered text
    """
    printer = PrintingConfig(type(obj))
    if configure is not None:
        logger.debug(f"Applying one-off configuration for {type(obj).__name__}")
        configure(printer)
    return printer.print_to_string(obj)
