# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Object Printing Core

Member introspection, the rule store and the recursive renderer.
"""

from .members import (
    MemberDescriptor,
    MemberKind,
    class_members,
    members_of,
    read_member,
    resolve_member,
)
from .model import Model
from .renderer import TERMINAL_TYPES, TraversalState, is_terminal, render
from .rules import Formatter, RenderConfig
from .settings import RenderSettings

__all__ = [
    "Formatter",
    "MemberDescriptor",
    "MemberKind",
    "Model",
    "RenderConfig",
    "RenderSettings",
    "TERMINAL_TYPES",
    "TraversalState",
    "class_members",
    "is_terminal",
    "members_of",
    "read_member",
    "render",
    "resolve_member",
]
