# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Object Printing - configurable recursive object-to-text rendering

Dumps the public data members of any object as indented text, recursing into
nested objects and collections. Output is customized per type and per member
without touching the rendered types: exclusion, custom formatters,
locale-aware numbers and text truncation.

Key Entry Points:
- object_printing.render() - Render an object with a RenderConfig
- object_printing.print_to_string() - Render with a one-off fluent configuration
- object_printing.ObjectPrinter.for_() - Reusable fluent configuration

Example Usage:
    ```python
    from object_printing import ObjectPrinter

    printer = (
        ObjectPrinter.for_(Person)
        .excluding_member("id")
        .alternative_for(float).using_culture("ru-RU")
    )
    print(printer.print_to_string(person))
    ```
"""

import logging

from .core import (
    MemberDescriptor,
    MemberKind,
    RenderConfig,
    RenderSettings,
    render,
)
from .formatters import culture_formatter, truncating_formatter
from .printing import AlternativeConfig, ObjectPrinter, PrintingConfig, print_to_string

# Libraries leave handler configuration to the application
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AlternativeConfig",
    "MemberDescriptor",
    "MemberKind",
    "ObjectPrinter",
    "PrintingConfig",
    "RenderConfig",
    "RenderSettings",
    "culture_formatter",
    "print_to_string",
    "render",
    "truncating_formatter",
]
