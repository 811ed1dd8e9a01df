"""
Member discovery for printable objects.

Enumerates the field-like and property members of a class in a stable order and
provides the identities used by per-member printing configuration.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import inspect
import types
import typing
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, ClassVar

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type, fmt_value, qualified_name


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class MemberKind(str, Enum):
    """
    Member access strategy:
        - "field": data attribute (dataclass field, annotated attribute, slot or instance attribute)
        - "property": property descriptor evaluated on access
    """
    FIELD = "field"
    PROPERTY = "property"


@dataclass(frozen=True)
class Member:
    """A named member of a printable class.

    Attributes:
        name: Attribute name.
        owner: The class in the MRO which declares the member.
        kind: Field or property.
        declared_type: Declared type resolved from annotations, None if not declared or not a class.
    """
    name: str
    owner: type
    kind: MemberKind
    declared_type: type | None = None

    @property
    def full_name(self) -> str:
        """Fully qualified member name, the key of per-member configuration."""
        return qualified_name(self.owner, self.name)


# Methods --------------------------------------------------------------------------------------------------------------

def declaring_type(cls: type, name: str) -> type:
    """
    Return the first class in cls MRO which declares attribute `name`.

    A class declares a name if it has an annotation, a class dict entry or a slot for it.
    Names found nowhere in the MRO (plain instance attributes) belong to cls itself.

    Raises:
        TypeError: If cls is not a class.
    """
    if not isinstance(cls, type):
        raise TypeError(f"cls must be a class, but found {fmt_type(cls)}")

    for klass in cls.__mro__:
        if klass is not object and _declares(klass, name):
            return klass
    return cls


def member_full_name(cls: type, name: str) -> str:
    """Return the fully qualified name of member `name` as seen from cls."""
    return qualified_name(declaring_type(cls, name), name)


def member_keys(member: Member) -> tuple[str, ...]:
    """
    Return the configuration keys of member, most specific first.

    A declared member has a single key, its full_name. A plain instance attribute is
    declared by no class, so it may have been assigned in any base class __init__;
    such a member is also keyed by each base class of its owner.

    Examples:
        >>> class Base:
        ...     def __init__(self):
        ...         self.secret = "s"
        >>> class Sub(Base): ...
        >>> member = search_members(Sub, instance=Sub())[0]
        >>> [key.rsplit(".", 2)[-2] for key in member_keys(member)]
        ['Sub', 'Base']
    """
    if any(_declares(klass, member.name) for klass in member.owner.__mro__ if klass is not object):
        return (member.full_name,)
    return tuple(qualified_name(klass, member.name) for klass in member.owner.__mro__ if klass is not object)


def member_type(member: Member, value: Any) -> type:
    """Return the declared type of member, or the runtime type of value if nothing is declared."""
    return member.declared_type if member.declared_type is not None else type(value)


def member_value(member: Member, obj: Any) -> Any:
    """
    Read the current value of member from obj.

    Raises:
        TypeError: If member is neither a field nor a property.
    """
    if member.kind not in (MemberKind.FIELD, MemberKind.PROPERTY):
        raise TypeError(f"Member must be a field or property, but found {fmt_value(member)}")
    return getattr(obj, member.name)


def search_members(cls: type, instance: Any = None) -> tuple[Member, ...]:
    """
    Search public members of a class in a stable order.

    Fields come first, then properties. Private names (starting with '_') are skipped,
    and each name is listed once at its first position.

    Fields are taken from dataclasses.fields() for dataclasses; for other classes
    from annotated class attributes and __slots__, base classes first.
    Properties are listed in class definition order, base classes first.

    Args:
        cls: The class to inspect.
        instance: Optional instance of cls; its public instance attributes not declared
                  on the class are appended as fields.

    Returns:
        Tuple of Member items.

    Raises:
        TypeError: If cls is not a class.

    Examples:
        >>> @dataclass
        ... class Person:
        ...     name: str
        ...     age: int
        ...     @property
        ...     def adult(self) -> bool:
        ...         return self.age >= 18
        >>> [m.name for m in search_members(Person)]
        ['name', 'age', 'adult']
    """
    if not isinstance(cls, type):
        raise TypeError(f"cls must be a class, but found {fmt_type(cls)}")

    hints = _type_hints(cls)
    members: dict[str, Member] = {}

    def add(name: str, kind: MemberKind, typ: type | None) -> None:
        if name.startswith("_") or name in members:
            return
        members[name] = Member(name=name, owner=declaring_type(cls, name), kind=kind, declared_type=typ)

    # Fields
    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            add(f.name, MemberKind.FIELD, _resolve_type(hints.get(f.name, f.type)))
    else:
        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            for name in _own_annotations(klass):
                hint = hints.get(name)
                if hint is ClassVar or typing.get_origin(hint) is ClassVar:
                    continue
                add(name, MemberKind.FIELD, _resolve_type(hint))
            for name in _own_slots(klass):
                add(name, MemberKind.FIELD, _resolve_type(hints.get(name)))

    # Properties
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                add(name, MemberKind.PROPERTY, _property_type(attr))

    # Instance attributes
    if instance is not None:
        for name in getattr(instance, "__dict__", {}):
            add(name, MemberKind.FIELD, _resolve_type(hints.get(name)))

    return tuple(members.values())


# Private Methods ------------------------------------------------------------------------------------------------------

def _declares(klass: type, name: str) -> bool:
    return name in vars(klass) or name in _own_annotations(klass) or name in _own_slots(klass)


def _own_annotations(klass: type) -> dict[str, Any]:
    """Annotations declared in klass body, without inherited ones."""
    try:
        return inspect.get_annotations(klass)
    except (TypeError, NameError):
        return {}


def _own_slots(klass: type) -> tuple[str, ...]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(s for s in slots if s not in ("__dict__", "__weakref__"))


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolved type hints of cls, raw annotations if forward references cannot be resolved."""
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, AttributeError):
        hints = {}
        for klass in reversed(cls.__mro__):
            hints.update(_own_annotations(klass))
        return hints


def _property_type(prop: property) -> type | None:
    if prop.fget is None:
        return None
    try:
        hint = typing.get_type_hints(prop.fget).get("return")
    except (NameError, TypeError, AttributeError):
        hint = getattr(prop.fget, "__annotations__", {}).get("return")
    return _resolve_type(hint)


def _resolve_type(hint: Any) -> type | None:
    """
    Reduce a type hint to a class.

    Plain classes are returned as is, Optional[X] and X | None are reduced to X,
    anything else (strings, generics, multi-type unions) yields None.
    """
    if isinstance(hint, type) and not isinstance(hint, types.GenericAlias):
        return hint
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return _resolve_type(args[0])
    return None
