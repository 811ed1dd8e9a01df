"""
Object Printing Tools
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import datetime
import uuid
from dataclasses import replace
from decimal import Decimal
from enum import Enum, unique
from fractions import Fraction
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .cultures import format_culture
from .members import Member, MemberKind, member_type, member_value, search_members
from .options import PrintOptions
from .utils import class_name, fmt_type

TERMINAL_TYPES = (
    bool,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    str,
    bytes,
    bytearray,
    uuid.UUID,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    Enum,
)

INDENT = "\t"


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ValueShape(str, Enum):
    """
    How a value is printed at a given nesting level:
        - "null": None
        - "culture": formatted with a registered locale
        - "trimmed_text": str cut to the global length limit
        - "terminal": printed via str()
        - "elided": nesting limit reached, printed as '...'
        - "map": key-value lines in braces
        - "sequence": indexed lines in brackets
        - "composite": class name followed by member lines
    """
    NULL = "null"
    CULTURE = "culture"
    TRIMMED_TEXT = "trimmed_text"
    TERMINAL = "terminal"
    ELIDED = "elided"
    MAP = "map"
    SEQUENCE = "sequence"
    COMPOSITE = "composite"


class ObjectPrinter:
    """
    Recursive printer of arbitrary objects into an indented text tree.

    Processing Order (first match wins):
        1. None → 'null'
        2. Non-nesting shortcuts, applied at any depth:
           - runtime type has a registered culture → locale formatting
           - str with options.trim_strings set → trimmed text
           - terminal types (numbers, bool, str, bytes, UUID, dates, enums) → str(value)
        3. Nesting limit: depth + 1 > options.max_depth → '...'
        4. Mappings → '{' key: value lines '}'
        5. Other iterables → '[' index: item lines ']'
        6. Everything else → class name followed by 'member = value' lines

    Member Processing:
        - Members of excluded types or with excluded names are skipped without being printed
        - Fields which are declared but not assigned on the instance are skipped
        - None member values print as 'null'
        - Custom printers: member type printer first, then member name printer
        - Otherwise the member value is printed recursively one level deeper
        - Member trim length, if registered, applies to the printed member text

    Every line inside a nested block is indented with one tab per nesting level, and every
    printed value ends with options.newline.

    Examples:
        >>> printer = ObjectPrinter(PrintOptions(max_depth=2))
        >>> print(printer.render([1, 2, 3]), end="")
        [
            0: 1
            1: 2
            2: 3
        ]

    Note:
        There is no tracking of already printed objects, object graphs with cycles are
        bounded only by options.max_depth.
    """

    def __init__(self, options: PrintOptions | None = None) -> None:
        if not isinstance(options, (PrintOptions, type(None))):
            raise TypeError(f"options must be a PrintOptions instance, but found {fmt_type(options)}")
        self._options = options or PrintOptions()

    @property
    def options(self) -> PrintOptions:
        return self._options

    def render(self, obj: Any, depth: int = 0) -> str:
        """
        Print obj located at nesting level depth.

        Args:
            obj: Any object.
            depth: Nesting level of obj, 0 for the root object.

        Returns:
            Printed text terminated with options.newline.

        Raises:
            TypeError: If member discovery yields a member which is neither a field nor a property.
        """
        opt = self._options
        nl = opt.newline
        shape = classify(obj, depth, options=opt)

        if shape is ValueShape.NULL:
            return "null" + nl
        if shape is ValueShape.CULTURE:
            return format_culture(obj, opt.get_culture(type(obj))) + nl
        if shape is ValueShape.TRIMMED_TEXT:
            return truncate(str(obj) + nl, opt.trim_strings, newline=nl)
        if shape is ValueShape.TERMINAL:
            return str(obj) + nl
        if shape is ValueShape.ELIDED:
            return "..." + nl
        if shape is ValueShape.MAP:
            return self._render_map(obj, depth)
        if shape is ValueShape.SEQUENCE:
            return self._render_sequence(obj, depth)
        return self._render_composite(obj, depth)

    def _render_sequence(self, obj: abc.Iterable, depth: int) -> str:
        indent = INDENT * (depth + 1)
        lines = [f"{indent}{index}: {self.render(item, depth + 1)}" for index, item in enumerate(obj)]
        return _block("[", lines, "]", depth, self._options.newline)

    def _render_map(self, obj: Any, depth: int) -> str:
        indent = INDENT * (depth + 1)
        lines = [f"{indent}{key}: {self.render(value, depth + 1)}" for key, value in obj.items()]
        return _block("{", lines, "}", depth, self._options.newline)

    def _render_composite(self, obj: Any, depth: int) -> str:
        opt = self._options
        indent = INDENT * (depth + 1)
        parts = [class_name(obj, fully_qualified=opt.fully_qualified_names) + opt.newline]

        for member in search_members(type(obj), instance=obj):
            # Name and declared type exclusion go before reading the value
            if opt.is_excluded(member, member.declared_type):
                continue
            # Annotated but never assigned fields and unset slots
            if member.kind == MemberKind.FIELD and not hasattr(obj, member.name):
                continue
            value = member_value(member, obj)
            if member.declared_type is None and opt.is_excluded(member, type(value)):
                continue
            parts.append(f"{indent}{member.name} = {self._render_member(member, value, depth)}")

        return "".join(parts)

    def _render_member(self, member: Member, value: Any, depth: int) -> str:
        opt = self._options
        nl = opt.newline

        if value is None:
            text = "null" + nl
        elif printer := opt.get_type_printer(member_type(member, value)) or opt.get_member_printer(member):
            text = f"{printer(value)}{nl}"
        else:
            text = self.render(value, depth + 1)

        length = opt.get_member_trim(member)
        return text if length is None else truncate(text, length, newline=nl)


# Methods --------------------------------------------------------------------------------------------------------------

def classify(obj: Any, depth: int, *, options: PrintOptions) -> ValueShape:
    """
    Decide how obj is printed at nesting level depth.

    The order of checks defines which customization wins when several apply,
    see ObjectPrinter for the full processing order.
    """
    if obj is None:
        return ValueShape.NULL

    # Non-nesting shortcuts
    if options.get_culture(type(obj)) is not None:
        return ValueShape.CULTURE
    if isinstance(obj, str) and options.trim_strings is not None:
        return ValueShape.TRIMMED_TEXT
    if isinstance(obj, TERMINAL_TYPES):
        return ValueShape.TERMINAL

    if options.max_depth is not None and depth + 1 > options.max_depth:
        return ValueShape.ELIDED

    if isinstance(obj, abc.Mapping) or (isinstance(obj, abc.Iterable) and _is_dict_like(obj)):
        return ValueShape.MAP
    if isinstance(obj, abc.Iterable):
        return ValueShape.SEQUENCE
    return ValueShape.COMPOSITE


def truncate(text: str, length: int, *, newline: str = "\n") -> str:
    """
    Cut text to length characters and terminate it with newline.

    A trailing newline of text is not counted. Text shorter than length is returned unchanged.

    Examples:
        >>> truncate("HelloWorld\\n", 5)
        'Hello\\n'
        >>> truncate("Bob\\n", 5)
        'Bob\\n'
    """
    content = text[:-len(newline)] if text.endswith(newline) else text
    if len(content) >= length:
        return content[:length] + newline
    return text


def print_to_string(obj: Any, *, options: PrintOptions | None = None, **kwargs: Any) -> str:
    """
    Print any object into an indented text tree.

    Simplified interface to ObjectPrinter.render() for the root object.

    Args:
        obj: Object to print.
        options: PrintOptions instance; defaults to PrintOptions().
        **kwargs: PrintOptions fields overriding the corresponding options fields,
                  e.g. max_depth=3 or trim_strings=40.

    Returns:
        Printed text terminated with options.newline.

    Raises:
        TypeError: If options is not a PrintOptions instance or None,
                   or kwargs contain unknown PrintOptions fields.

    Examples:
        >>> @dataclass
        ... class Person:
        ...     name: str
        ...     age: int
        >>> print(print_to_string(Person("Bob", 20)), end="")
        Person
            name = Bob
            age = 20

        >>> print_to_string({"a": 1}, max_depth=0)
        '...\\n'
    """
    if not isinstance(options, (PrintOptions, type(None))):
        raise TypeError(f"options must be a PrintOptions instance, but found {fmt_type(options)}")

    opt = _merge_options(options, **kwargs)
    return ObjectPrinter(opt).render(obj, 0)


# Private Methods ------------------------------------------------------------------------------------------------------

def _block(opening: str, lines: list[str], closing: str, depth: int, newline: str) -> str:
    """Wrap item lines in brackets, empty blocks stay on one line."""
    if not lines:
        return opening + closing + newline
    return opening + newline + "".join(lines) + INDENT * depth + closing + newline


def _is_dict_like(obj: Any) -> bool:
    return callable(getattr(obj, "items", None)) and callable(getattr(obj, "keys", None))


def _merge_options(options: PrintOptions | None, **kwargs) -> PrintOptions:
    opt = PrintOptions(**kwargs) if options is None else replace(options, **kwargs)
    return opt
