# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the fluent printing surface.

Covers both entry points: ``ObjectPrinter.for_()`` for a reusable
configuration and ``print_to_string()`` for a one-off configuration.
"""

import logging
import re
from typing import Optional, Union

import pytest

from object_printing import (
    AlternativeConfig,
    ObjectPrinter,
    PrintingConfig,
    RenderSettings,
    print_to_string,
)
from tests.samples import ClassWithField, Customer, Loose, Person


def _value_after_name(name: str, value: str, text: str) -> bool:
    return re.search(f"{name}.+{value}", text) is not None


class TestPersonPrinting:
    """Printing a class with annotated fields."""

    def test_contains_type_and_all_members(self):
        text = print_to_string(Person())
        for token in ("Person", "id", "name", "height", "age"):
            assert token in text

    def test_contains_member_values(self):
        text = print_to_string(Person(name="NAME", height=180, age=60))
        assert "NAME" in text
        assert "180" in text
        assert "60" in text

    def test_value_follows_name(self):
        text = print_to_string(Person(name="Value"))
        assert _value_after_name("name", "Value", text)

    def test_excluding_type(self, person):
        assert "age" not in ObjectPrinter.for_(Person).excluding(int).print_to_string(person)
        assert "age" not in print_to_string(person, lambda config: config.excluding(int))

    def test_excluding_member(self, person):
        assert "age" not in ObjectPrinter.for_(Person).excluding_member("age").print_to_string(person)
        assert "age" not in print_to_string(person, lambda config: config.excluding_member("age"))

    def test_alternative_for_member(self, person):
        printer = ObjectPrinter.for_(Person).alternative_for_member("age").using(lambda age: f"({age})")
        assert "(30)" in printer.print_to_string(person)
        text = print_to_string(
            person, lambda config: config.alternative_for_member("age").using(lambda age: f"({age})")
        )
        assert "(30)" in text

    def test_alternative_for_type(self, person):
        printer = ObjectPrinter.for_(Person).alternative_for(int).using(lambda age: f"({age})")
        assert "(30)" in printer.print_to_string(person)
        text = print_to_string(person, lambda config: config.alternative_for(int).using(lambda age: f"({age})"))
        assert "(30)" in text

    def test_take_only(self):
        person = Person(name="Ivan")
        text = ObjectPrinter.for_(Person).alternative_for(str).take_only(1).print_to_string(person)
        assert "Ivan" not in text
        assert "I" in text
        text = print_to_string(person, lambda config: config.alternative_for(str).take_only(1))
        assert "Ivan" not in text
        assert "name = I\n" in text

    @pytest.mark.parametrize("name", [None, ""])
    def test_take_only_with_null_or_empty_keeps_member_name(self, name):
        text = print_to_string(Person(name=name), lambda config: config.alternative_for(str).take_only(1))
        assert "name" in text

    @pytest.mark.parametrize("culture,height,expected", [("en-GB", 50.5, "50.5"), ("ru-RU", 50.5, "50,5")])
    def test_using_culture(self, culture, height, expected):
        person = Person(height=height)
        text = ObjectPrinter.for_(Person).alternative_for(float).using_culture(culture).print_to_string(person)
        assert expected in text
        text = print_to_string(person, lambda config: config.alternative_for(float).using_culture(culture))
        assert expected in text


class TestFieldPrinting:
    """Printing a dataclass with plain fields."""

    def test_contains_all_fields(self, class_with_field):
        text = print_to_string(class_with_field)
        for token in ("int_field", "doubl_field", "str_field"):
            assert token in text

    def test_value_follows_name(self):
        text = print_to_string(ClassWithField(str_field="Value"))
        assert _value_after_name("str_field", "Value", text)

    def test_excluding_type(self, class_with_field):
        assert "int_field" not in print_to_string(class_with_field, lambda config: config.excluding(int))

    def test_excluding_field(self, class_with_field):
        text = print_to_string(class_with_field, lambda config: config.excluding_member("int_field"))
        assert "int_field" not in text

    def test_alternative_for_field(self, class_with_field):
        text = print_to_string(
            class_with_field, lambda config: config.alternative_for_member("int_field").using(lambda v: f"({v})")
        )
        assert "(7)" in text

    def test_alternative_for_type(self, class_with_field):
        text = print_to_string(class_with_field, lambda config: config.alternative_for(int).using(lambda v: f"({v})"))
        assert "(7)" in text

    def test_take_only(self, class_with_field):
        text = print_to_string(class_with_field, lambda config: config.alternative_for(str).take_only(1))
        assert "String" not in text
        assert "S" in text

    @pytest.mark.parametrize("value", [None, ""])
    def test_take_only_with_null_or_empty_keeps_field_name(self, value):
        text = print_to_string(ClassWithField(str_field=value), lambda config: config.alternative_for(str).take_only(1))
        assert "str_field" in text

    @pytest.mark.parametrize("culture,value,expected", [("en-GB", 50.5, "50.5"), ("ru-RU", 50.5, "50,5")])
    def test_using_culture(self, culture, value, expected):
        text = print_to_string(
            ClassWithField(doubl_field=value), lambda config: config.alternative_for(float).using_culture(culture)
        )
        assert expected in text


class TestBuilderValidation:
    """Configuration errors raised while building."""

    def test_owner_must_be_a_type(self):
        with pytest.raises(ValueError, match="owner must be a type"):
            PrintingConfig(Person())

    def test_unknown_member(self):
        with pytest.raises(ValueError, match="declares no public property or field"):
            ObjectPrinter.for_(Person).excluding_member("weight")
        with pytest.raises(ValueError, match="declares no public property or field"):
            ObjectPrinter.for_(Person).alternative_for_member("weight")

    def test_nested_member_path_is_rejected(self):
        with pytest.raises(ValueError, match="single direct member access"):
            ObjectPrinter.for_(Customer).alternative_for_member("address.city")

    def test_take_only_requires_text_target(self):
        with pytest.raises(ValueError, match="take_only applies to str values"):
            ObjectPrinter.for_(Person).alternative_for(int).take_only(1)
        with pytest.raises(ValueError, match="take_only applies to str values"):
            ObjectPrinter.for_(Person).alternative_for_member("age").take_only(1)

    def test_using_culture_requires_numeric_target(self):
        with pytest.raises(ValueError, match="using_culture applies to Number values"):
            ObjectPrinter.for_(Person).alternative_for(str).using_culture("en-GB")

    def test_unknown_culture(self):
        with pytest.raises(ValueError, match="Unknown locale"):
            ObjectPrinter.for_(Person).alternative_for(float).using_culture("xx-YY")

    def test_optional_type_target(self, person):
        text = ObjectPrinter.for_(Person).alternative_for(Optional[str]).take_only(1).print_to_string(person)
        assert "name = A\n" in text

    def test_union_type_target_is_rejected(self):
        with pytest.raises(ValueError, match="single type"):
            ObjectPrinter.for_(Person).excluding(Union[int, str])

    def test_init_only_attribute_cannot_be_targeted(self):
        with pytest.raises(ValueError, match="declares no public property or field"):
            ObjectPrinter.for_(Loose).excluding_member("count")

    def test_member_rules_on_optional_text(self):
        text = ObjectPrinter.for_(Person).alternative_for_member("name").take_only(2).print_to_string(Person(name="Ivan"))
        assert "name = Iv\n" in text


class TestBuilderSurface:
    """Chaining and configuration objects."""

    def test_alternative_for_returns_pending_rule(self):
        printer = ObjectPrinter.for_(Person)
        pending = printer.alternative_for(int)
        assert isinstance(pending, AlternativeConfig)
        assert pending.parent is printer
        assert pending.using(str) is printer

    def test_chained_rules(self, person):
        text = (
            ObjectPrinter.for_(Person)
            .excluding_member("id")
            .alternative_for(float)
            .using_culture("ru-RU")
            .alternative_for_member("age")
            .using(lambda age: f"{age} years")
            .print_to_string(person)
        )
        assert text == "Person\n\tname = Alex\n\theight = 1,8\n\tage = 30 years\n"

    def test_print_to_string_none(self):
        assert print_to_string(None) == "null\n"

    def test_undeclared_members_are_printed(self):
        assert print_to_string(Loose()) == "Loose\n\tcount = 3\n\tlabel = loose\n"

    def test_custom_settings(self, person):
        printer = PrintingConfig(Person, settings=RenderSettings(indent="    "))
        printer.excluding_member("id")
        assert printer.print_to_string(person) == "Person\n    name = Alex\n    height = 1.8\n    age = 30\n"


class TestBuilderLogging:
    """Builder calls are logged at DEBUG."""

    def test_rules_are_logged(self, caplog, person):
        caplog.set_level(logging.DEBUG, logger="object_printing")
        print_to_string(
            person,
            lambda config: config.alternative_for(str).take_only(1).alternative_for(float).using_culture("en-GB"),
        )
        printing_messages = [record.getMessage() for record in caplog.records if record.name == "object_printing.printing"]
        assert "Created printing config for Person" in printing_messages
        assert "Applying one-off configuration for Person" in printing_messages
        assert "Truncating type str to 1 characters" in printing_messages
        assert "Formatting type float with locale en-GB" in printing_messages

    def test_member_rules_name_the_member(self, caplog):
        caplog.set_level(logging.DEBUG, logger="object_printing")
        ObjectPrinter.for_(Person).alternative_for_member("name").take_only(2)
        assert "Truncating member Person.name to 2 characters" in caplog.messages
