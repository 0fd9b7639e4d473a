# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import Field

from .model import Model


class RenderSettings(Model):
    """
    Layout settings for the text renderer.

    The defaults are the canonical output layout: one tab per nesting level,
    ``\\n`` line terminators and the literal ``null`` / ``circle reference``
    markers. Any other values produce output outside that layout.
    """

    indent: str = Field(default="\t", description="One indentation unit.")
    newline: str = Field(default="\n", description="Line terminator.")
    null_text: str = Field(default="null", description="Text for absent values.")
    cycle_text: str = Field(
        default="circle reference",
        description="Text emitted in place of an object already on the traversal stack.",
    )
    member_separator: str = Field(
        default=" = ", description="Separator between a member name and its value."
    )
