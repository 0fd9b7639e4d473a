# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Ready-made formatters for the rule store.

- ``culture_formatter``: numbers with a locale's decimal separator (Babel)
- ``truncating_formatter``: text cut to a maximum length

Both pass ``None`` through unchanged so the renderer writes ``null``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

from .core.rules import Formatter

logger = logging.getLogger(__name__)


def parse_locale(locale: Union[str, Locale]) -> Locale:
    """
    Parse ``"en-GB"``, ``"ru_RU"`` or a ``babel.Locale`` into a ``Locale``.

    Raises:
        ValueError: If the identifier is malformed or names no known locale
    """
    if isinstance(locale, Locale):
        return locale
    try:
        return Locale.parse(str(locale).replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise ValueError(f"Unknown locale {locale!r}") from e


def culture_formatter(locale: Union[str, Locale]) -> Formatter:
    """
    Build a formatter that writes numbers the way ``locale`` does.

    Full precision, no digit grouping: 50.5 is ``"50.5"`` for en-GB and
    ``"50,5"`` for ru-RU.

    Args:
        locale: Locale identifier or ``babel.Locale``

    Returns:
        Formatter for numeric values

    Raises:
        ValueError: If the locale is unknown (raised here, not at render time)
    """
    parsed = parse_locale(locale)
    logger.debug(f"Built number formatter for locale {parsed}")

    def _format(value: Any) -> Optional[str]:
        if value is None:
            return None
        return format_decimal(
            value, locale=parsed, decimal_quantization=False, group_separator=False
        )

    return _format


def truncating_formatter(max_length: int) -> Formatter:
    """
    Build a formatter that keeps the first ``max_length`` characters.

    ``None`` stays ``None`` and empty text stays empty, so the member line is
    still written with its name.

    Raises:
        ValueError: If ``max_length`` is not a non-negative integer
    """
    if isinstance(max_length, bool) or not isinstance(max_length, int) or max_length < 0:
        raise ValueError(f"max_length must be a non-negative integer, got {max_length!r}")

    def _truncate(value: Any) -> Optional[str]:
        if value is None:
            return None
        text = value if isinstance(value, str) else str(value)
        return text[:max_length]

    return _truncate
