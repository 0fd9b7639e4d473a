# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Rule store consulted by the renderer.

Holds the excluded types, excluded members, and the per-type and per-member
formatters of one rendering configuration. Lookups only; no traversal logic.
"""

from __future__ import annotations

import logging
import types
import typing
from typing import Any, Callable, Dict, Optional, Set

from .members import MemberDescriptor, MemberKey, narrow_annotation, resolve_member
from .settings import RenderSettings

logger = logging.getLogger(__name__)

Formatter = Callable[[Any], Any]


def _type_target(value_type: Any) -> Any:
    """Normalize a rule target the way member annotations are narrowed."""
    target = narrow_annotation(value_type)
    origin = typing.get_origin(target)
    if origin is typing.Union or origin is types.UnionType:
        raise ValueError(f"Rule target must be a single type, got union {value_type!r}")
    if isinstance(target, type) or origin is not None:
        return target
    raise ValueError(f"Rule target must be a type, got {value_type!r}")


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", repr(value_type))


class RenderConfig:
    """
    Exclusion and formatting rules for rendering.

    Mutated through the methods below (each returns the store for chaining)
    and read-only while a render call is in progress. The store is not
    synchronized: concurrent renders may share it only while nobody mutates it.

    Example:
        ```python
        config = (
            RenderConfig()
            .exclude_type(UUID)
            .exclude_member(Person, "height")
            .set_member_formatter(Person, "age", lambda age: f"{age} years")
        )
        text = render(person, config)
        ```
    """

    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings or RenderSettings()
        self.excluded_types: Set[Any] = set()
        self.excluded_members: Set[MemberKey] = set()
        self.type_formatters: Dict[Any, Formatter] = {}
        self.member_formatters: Dict[MemberKey, Formatter] = {}

    def exclude_type(self, value_type: Any) -> "RenderConfig":
        """Omit every member whose value type is ``value_type``, at any depth."""
        value_type = _type_target(value_type)
        self.excluded_types.add(value_type)
        logger.debug(f"Excluding members of type {_type_name(value_type)}")
        return self

    def exclude_member(self, owner: type, name: str) -> "RenderConfig":
        """Omit one member of ``owner``. Raises ``ValueError`` for a bad selector."""
        member = resolve_member(owner, name)
        self.excluded_members.add(member.key)
        logger.debug(f"Excluding member {member.owner.__name__}.{member.name}")
        return self

    def set_type_formatter(self, value_type: Any, formatter: Formatter) -> "RenderConfig":
        """Format members of ``value_type`` with ``formatter``, replacing any previous one."""
        value_type = _type_target(value_type)
        if not callable(formatter):
            raise ValueError(f"Formatter for {_type_name(value_type)} must be callable")
        self.type_formatters[value_type] = formatter
        logger.debug(f"Registered formatter for type {_type_name(value_type)}")
        return self

    def set_member_formatter(self, owner: type, name: str, formatter: Formatter) -> "RenderConfig":
        """Format one member of ``owner`` with ``formatter``, replacing any previous one."""
        member = resolve_member(owner, name)
        if not callable(formatter):
            raise ValueError(f"Formatter for {owner.__name__}.{name} must be callable")
        self.member_formatters[member.key] = formatter
        logger.debug(f"Registered formatter for member {member.owner.__name__}.{member.name}")
        return self

    def is_member_excluded(self, member: MemberDescriptor) -> bool:
        return member.key in self.excluded_members

    def is_type_excluded(self, value_type: Any) -> bool:
        """Exact match, or match on the origin of a generic such as ``list[str]``."""
        if value_type in self.excluded_types:
            return True
        origin = typing.get_origin(value_type)
        return origin is not None and origin in self.excluded_types

    def formatter_for(self, member: MemberDescriptor, value_type: Any) -> Optional[Formatter]:
        """Member formatter if one is registered, else the type formatter, else None."""
        formatter = self.member_formatters.get(member.key)
        if formatter is None:
            formatter = self.type_formatters.get(value_type)
        if formatter is None:
            origin = typing.get_origin(value_type)
            if origin is not None:
                formatter = self.type_formatters.get(origin)
        return formatter
