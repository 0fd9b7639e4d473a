# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared fixtures for Object Printing tests.
"""

from __future__ import annotations

from uuid import UUID

import pytest

from object_printing import RenderConfig

from tests.samples import ClassWithField, Person

PERSON_ID = UUID("12345678-1234-5678-1234-567812345678")


@pytest.fixture
def person() -> Person:
    """Person with a fixed id so rendered output is predictable."""
    return Person(name="Alex", height=1.8, age=30, id=PERSON_ID)


@pytest.fixture
def class_with_field() -> ClassWithField:
    return ClassWithField(int_field=7, str_field="String", doubl_field=2.5)


@pytest.fixture
def config() -> RenderConfig:
    return RenderConfig()
