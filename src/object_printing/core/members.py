# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Uniform member introspection for arbitrary runtime types.

Every data-carrying member of a type is described by a single
``MemberDescriptor`` whether it is declared as a property or as a field:

- Properties: ``property`` and ``functools.cached_property`` attributes found
  on the class MRO (base classes first, most derived definition wins)
- Fields: Pydantic ``model_fields``, dataclass fields, ``__slots__`` and
  public class annotations, followed by public instance ``__dict__`` entries
  that the class does not declare

Names starting with an underscore are never members.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
import typing
from enum import Enum
from functools import cached_property, lru_cache
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from .model import Model

logger = logging.getLogger(__name__)

MemberKey = Tuple[type, str]


class MemberKind(str, Enum):
    """How a member is declared on its owner type."""

    PROPERTY = "property"
    FIELD = "field"


class MemberDescriptor(Model):
    """
    A single data member of a type.

    Attributes:
        name: Attribute name on the instance
        owner: Class that declares the member
        declared_type: Declared value type, ``Optional[X]`` narrowed to ``X``;
            ``None`` when the member carries no usable annotation
        kind: Property-like or field-like
    """

    name: str
    owner: type
    declared_type: Any = None
    kind: MemberKind

    @property
    def key(self) -> MemberKey:
        """Identifier used by the rule store: ``(declaring type, name)``."""
        return (self.owner, self.name)

    def value_type(self, value: Any) -> Any:
        """Declared type, or the runtime type of ``value`` when undeclared."""
        if self.declared_type is not None:
            return self.declared_type
        return type(value)


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _is_library_class(klass: type) -> bool:
    # object and pydantic's own bases contribute no user data members
    return klass is object or klass.__module__.split(".")[0] == "pydantic"


def narrow_annotation(hint: Any) -> Any:
    """Reduce an annotation to the type used for rule lookups."""
    if hint is None or isinstance(hint, (str, typing.ForwardRef)):
        return None
    origin = typing.get_origin(hint)
    if origin is typing.Annotated:
        return narrow_annotation(typing.get_args(hint)[0])
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return narrow_annotation(args[0])
    return hint


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass, eval_str=True))
    except (NameError, TypeError, SyntaxError, AttributeError):
        # Unresolvable forward references stay as strings and narrow to None
        return dict(inspect.get_annotations(klass))


def _is_class_var(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar


def _return_annotation(attr: Any) -> Any:
    func = attr.fget if isinstance(attr, property) else attr.func
    if func is None:
        return None
    try:
        return narrow_annotation(typing.get_type_hints(func).get("return"))
    except (NameError, TypeError, SyntaxError, AttributeError):
        return None


def _user_mro(cls: type) -> List[type]:
    """MRO without library bases, most derived first."""
    return [klass for klass in cls.__mro__ if not _is_library_class(klass)]


def _declaring_class(cls: type, name: str, annotations: Dict[type, Dict[str, Any]]) -> type:
    for klass in _user_mro(cls):
        if name in annotations[klass] or name in vars(klass):
            return klass
    return cls


def _slot_names(klass: type) -> List[str]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [name for name in slots if _is_public(name)]


def _property_members(cls: type) -> List[MemberDescriptor]:
    mro = _user_mro(cls)
    ordered: List[str] = []
    for klass in reversed(mro):
        for name in vars(klass):
            if _is_public(name) and name not in ordered:
                ordered.append(name)

    members = []
    for name in ordered:
        declaring = next(klass for klass in mro if name in vars(klass))
        attr = vars(declaring)[name]
        if isinstance(attr, (property, cached_property)):
            members.append(
                MemberDescriptor(
                    name=name,
                    owner=declaring,
                    declared_type=_return_annotation(attr),
                    kind=MemberKind.PROPERTY,
                )
            )
    return members


def _field_members(cls: type, skip: set) -> List[MemberDescriptor]:
    mro = _user_mro(cls)
    annotations = {klass: _own_annotations(klass) for klass in mro}
    declared: Dict[str, Any] = {}
    for klass in reversed(mro):
        declared.update(annotations[klass])

    names: List[str] = []
    if issubclass(cls, BaseModel):
        # Pydantic has already resolved forward references
        for name, info in cls.model_fields.items():
            names.append(name)
            declared[name] = info.annotation
    elif dataclasses.is_dataclass(cls):
        names.extend(f.name for f in dataclasses.fields(cls))
    for klass in reversed(mro):
        names.extend(_slot_names(klass))
        names.extend(
            name for name, hint in annotations[klass].items() if not _is_class_var(hint)
        )

    members = []
    seen = set(skip)
    for name in names:
        if name in seen or not _is_public(name):
            continue
        seen.add(name)
        members.append(
            MemberDescriptor(
                name=name,
                owner=_declaring_class(cls, name, annotations),
                declared_type=narrow_annotation(declared.get(name)),
                kind=MemberKind.FIELD,
            )
        )
    return members


@lru_cache(maxsize=None)
def class_members(cls: type) -> Tuple[MemberDescriptor, ...]:
    """
    Members declared by ``cls``: properties first, then fields.

    Each group keeps declaration order. Results are cached per class.
    """
    properties = _property_members(cls)
    fields = _field_members(cls, skip={member.name for member in properties})
    return tuple(properties) + tuple(fields)


def members_of(obj: Any) -> List[MemberDescriptor]:
    """
    Members of the runtime type of ``obj`` that are present on this instance.

    Declared fields the instance never assigned are left out. Public instance
    attributes the class does not declare are appended with no declared type.
    """
    cls = type(obj)
    members = []
    for member in class_members(cls):
        if member.kind is MemberKind.FIELD and not hasattr(obj, member.name):
            continue
        members.append(member)

    known = {member.name for member in class_members(cls)}
    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name in instance_dict:
            if _is_public(name) and name not in known:
                members.append(
                    MemberDescriptor(name=name, owner=cls, kind=MemberKind.FIELD)
                )
    return members


def read_member(obj: Any, member: MemberDescriptor) -> Any:
    """Current value of ``member`` on ``obj``."""
    if member.kind in (MemberKind.PROPERTY, MemberKind.FIELD):
        return getattr(obj, member.name)
    raise TypeError(
        f"Member {member.name!r} of {member.owner.__name__} is neither a property nor a field"
    )


def resolve_member(owner: type, name: Any) -> MemberDescriptor:
    """
    Validate a member selector and return its descriptor.

    Args:
        owner: Type the selector is applied to
        name: A single direct member name, e.g. ``"age"``

    Returns:
        The descriptor of the member, keyed to its declaring class

    Raises:
        ValueError: If ``owner`` is not a type, or ``name`` is not a single
            direct property or field name declared on ``owner``

    Example:
        ```python
        member = resolve_member(Person, "age")
        assert member.key == (Person, "age")
        ```
    """
    if not isinstance(owner, type):
        raise ValueError(f"Member owner must be a type, got {owner!r}")
    if not isinstance(name, str) or not name:
        raise ValueError(
            f"Member selector for {owner.__name__} must be a non-empty member name, got {name!r}"
        )
    if not name.isidentifier():
        raise ValueError(
            f"Member selector {name!r} is not a single direct member access on {owner.__name__}"
        )

    for member in class_members(owner):
        if member.name == name:
            logger.debug(f"Resolved {owner.__name__}.{name} to {member.kind.value} on {member.owner.__name__}")
            return member

    raise ValueError(
        f"{owner.__name__} declares no public property or field named {name!r}"
    )
