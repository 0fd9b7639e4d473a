# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Recursive object-to-text renderer.

Walks an object graph depth first and produces one indented, multi-line
string. Each composite value (object, mapping or other collection) gets a
header line with its runtime type name, followed by one line per member or
element indented one tab deeper than the header (tabs shown as spaces):

    Person
        name = Alex
        address = Address
            city = Berlin
        tags = list
            admin
            owner

Terminal values (numbers, text, dates, durations, enum members, UUIDs) are
written with ``str()``. ``None`` is written as ``null``. A value already on the
traversal stack is written as ``circle reference`` with no line terminator.
"""

from __future__ import annotations

import logging
import numbers
import uuid
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from enum import Enum
from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel

from .members import MemberDescriptor, members_of, read_member
from .rules import RenderConfig

logger = logging.getLogger(__name__)

# Fixed set of atomic values; never decomposed and never pushed on the stack
TERMINAL_TYPES = (
    numbers.Number,
    np.generic,
    str,
    bytes,
    bytearray,
    date,
    time,
    timedelta,
    Enum,
    uuid.UUID,
    type,
)


def is_terminal(value: Any) -> bool:
    # 0-d arrays hold a single scalar and cannot be iterated
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return True
    return isinstance(value, TERMINAL_TYPES)


def is_collection(value: Any) -> bool:
    # Pydantic models iterate over (name, value) pairs but are plain objects here
    return isinstance(value, Iterable) and not isinstance(value, BaseModel)


@dataclass
class TraversalState:
    """Identity stack of the composite values currently being rendered."""

    stack: List[int] = field(default_factory=list)

    def __contains__(self, value: Any) -> bool:
        return id(value) in self.stack

    def push(self, value: Any) -> None:
        self.stack.append(id(value))

    def pop(self) -> None:
        self.stack.pop()


class _Renderer:
    def __init__(self, config: RenderConfig):
        self.config = config
        self.settings = config.settings
        self.state = TraversalState()

    def render_value(self, value: Any, depth: int) -> str:
        settings = self.settings
        if value is None:
            return settings.null_text + settings.newline
        if is_terminal(value):
            return str(value) + settings.newline
        if value in self.state:
            logger.debug(f"Cycle detected at {type(value).__name__} (depth {depth})")
            return settings.cycle_text

        self.state.push(value)
        try:
            if isinstance(value, Mapping):
                return self._render_mapping(value, depth)
            if is_collection(value):
                return self._render_collection(value, depth)
            return self._render_object(value, depth)
        finally:
            self.state.pop()

    def _header(self, value: Any) -> str:
        return type(value).__name__ + self.settings.newline

    def _member_line(self, name: str, rendered: str, depth: int) -> str:
        settings = self.settings
        return settings.indent * (depth + 1) + name + settings.member_separator + rendered

    def _render_collection(self, collection: Iterable, depth: int) -> str:
        indentation = self.settings.indent * (depth + 1)
        parts = [self._header(collection)]
        if isinstance(collection, Iterator):
            # One-shot iterators are not consumed; header only
            return "".join(parts)
        for element in collection:
            parts.append(indentation + self.render_value(element, depth + 1))
        return "".join(parts)

    def _render_mapping(self, mapping: Mapping, depth: int) -> str:
        parts = [self._header(mapping)]
        for key, value in mapping.items():
            parts.append(self._member_line(str(key), self.render_value(value, depth + 1), depth))
        return "".join(parts)

    def _render_object(self, obj: Any, depth: int) -> str:
        parts = [self._header(obj)]
        for member in members_of(obj):
            rendered = self._render_member(obj, member, depth)
            if rendered is not None:
                parts.append(self._member_line(member.name, rendered, depth))
        return "".join(parts)

    def _render_member(self, obj: Any, member: MemberDescriptor, depth: int) -> Optional[str]:
        """Rendered member value, or None when a rule excludes the member."""
        config = self.config
        if config.is_member_excluded(member):
            return None
        # Declared types are checked before the getter runs
        if member.declared_type is not None and config.is_type_excluded(member.declared_type):
            return None
        value = read_member(obj, member)
        value_type = member.value_type(value)
        if member.declared_type is None and config.is_type_excluded(value_type):
            return None

        formatter = config.formatter_for(member, value_type)
        if formatter is not None:
            value = formatter(value)
        return self.render_value(value, depth + 1)


def render(root: Any, config: Optional[RenderConfig] = None) -> str:
    """
    Render ``root`` and everything reachable from it as indented text.

    Args:
        root: Any object, including None
        config: Exclusion and formatting rules; an empty store when omitted

    Returns:
        The complete text. Never None.

    Example:
        ```python
        config = RenderConfig().exclude_type(int)
        print(render(person, config))
        ```
    """
    config = config if config is not None else RenderConfig()
    logger.debug(f"Rendering {type(root).__name__}")
    return _Renderer(config).render_value(root, 0)
