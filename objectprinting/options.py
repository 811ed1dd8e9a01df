"""
Object Printing configuration
"""

# Standard library -----------------------------------------------------------------------------------------------------
import warnings
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping

# Third-party ----------------------------------------------------------------------------------------------------------
from babel import Locale

# Local ----------------------------------------------------------------------------------------------------------------
from .cultures import supports_culture, to_locale
from .members import Member, member_full_name, member_keys
from .utils import fmt_type, fmt_value

Printer = Callable[[Any], Any]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class PrintOptions:
    """
    Immutable configuration of a print session.

    Every builder method returns a new PrintOptions instance and leaves the receiver
    unchanged, so a configured instance can be shared between sessions and threads.

    Attributes:
        max_depth: Maximum nesting level; values deeper than this are printed as '...'.
                   None removes the limit, in which case cyclic object graphs never terminate.
        trim_strings: Length limit for every str value, None for no limit.
        newline: Line terminator used throughout one output.
        fully_qualified_names: Print module.Class instead of Class for composite objects.
        excluded_types: Member types which are never printed.
        excluded_members: Fully qualified names of members which are never printed.
        type_printers: Custom printers of member values keyed by the member's type.
        member_printers: Custom printers of member values keyed by fully qualified member name.
        member_trims: Length limits of printed members keyed by fully qualified member name.
        cultures: Locales used to format values of a given runtime type.

    Examples:
        >>> options = (
        ...     PrintOptions()
        ...     .exclude_type(uuid.UUID)
        ...     .exclude_member(Person, "password")
        ...     .add_type_printer(int, lambda x: f"{x:#x}")
        ...     .add_member_printer(Person, "name", str.upper)
        ...     .trim_member(Person, "bio", 20)
        ...     .with_culture(float, "de_DE")
        ...     .with_max_depth(3)
        ... )
    """
    max_depth: int | None = 10
    trim_strings: int | None = None
    newline: str = "\n"
    fully_qualified_names: bool = False

    excluded_types: frozenset[type] = frozenset()
    excluded_members: frozenset[str] = frozenset()
    type_printers: Mapping[type, Printer] = field(default_factory=dict)
    member_printers: Mapping[str, Printer] = field(default_factory=dict)
    member_trims: Mapping[str, int] = field(default_factory=dict)
    cultures: Mapping[type, Locale] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate scalars and freeze lookup tables."""
        if self.max_depth is not None:
            _validate_length("max_depth", self.max_depth)
        if self.trim_strings is not None:
            _validate_length("trim_strings", self.trim_strings)
        if not isinstance(self.newline, str) or not self.newline:
            raise TypeError(f"newline must be a non-empty str, but found {fmt_value(self.newline)}")

        # Use object.__setattr__ to bypass frozen restriction
        object.__setattr__(self, "excluded_types", frozenset(self.excluded_types))
        object.__setattr__(self, "excluded_members", frozenset(self.excluded_members))
        for name in ("type_printers", "member_printers", "member_trims"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        cultures = {typ: to_locale(locale) for typ, locale in self.cultures.items()}
        object.__setattr__(self, "cultures", MappingProxyType(cultures))

    # Class Methods ------------------------------------

    @classmethod
    def debug_options(cls) -> "PrintOptions":
        """
        Create a PrintOptions instance configured for debugging.

        Returns:
            PrintOptions: Shallow nesting and truncated strings for compact console output.
        """
        return cls(max_depth=3, trim_strings=80)

    # Builders -----------------------------------------

    def exclude_type(self, typ: type) -> "PrintOptions":
        """Skip all members of type typ."""
        _validate_type(typ)
        return replace(self, excluded_types=self.excluded_types | {typ})

    def exclude_member(self, cls: type, name: str) -> "PrintOptions":
        """Skip member `name` of cls."""
        return replace(self, excluded_members=self.excluded_members | {_member_key(cls, name)})

    def add_type_printer(self, typ: type, printer: Printer) -> "PrintOptions":
        """
        Register or override a printer for members of type typ.

        The printer receives the member value and its result is printed via str().
        """
        _validate_type(typ)
        _validate_printer(printer)
        return replace(self, type_printers={**self.type_printers, typ: printer})

    def add_member_printer(self, cls: type, name: str, printer: Printer) -> "PrintOptions":
        """Register or override a printer for member `name` of cls."""
        _validate_printer(printer)
        return replace(self, member_printers={**self.member_printers, _member_key(cls, name): printer})

    def trim_member(self, cls: type, name: str, length: int) -> "PrintOptions":
        """Limit the printed text of member `name` of cls to length characters."""
        _validate_length("length", length)
        return replace(self, member_trims={**self.member_trims, _member_key(cls, name): length})

    def trim_strings_to(self, length: int | None) -> "PrintOptions":
        """Limit every printed str value to length characters, None to disable."""
        return replace(self, trim_strings=length)

    def with_culture(self, typ: type, locale: Locale | str) -> "PrintOptions":
        """
        Format values of runtime type typ with locale.

        Raises:
            TypeError: If typ values have no locale-aware representation.
            ValueError: If locale is unknown.
        """
        _validate_type(typ)
        if not supports_culture(typ):
            raise TypeError(f"Culture formatting is not supported for {fmt_type(typ)}")
        return replace(self, cultures={**self.cultures, typ: to_locale(locale)})

    def with_max_depth(self, max_depth: int | None) -> "PrintOptions":
        """Set the maximum nesting level, None to remove the limit."""
        if max_depth is None:
            warnings.warn(
                "max_depth=None removes the nesting limit, printing a cyclic object graph "
                "will raise RecursionError",
                RuntimeWarning,
                stacklevel=2,
            )
        return replace(self, max_depth=max_depth)

    # Lookups ------------------------------------------

    def is_excluded(self, member: Member, typ: type | None) -> bool:
        """Check member against excluded member names and, if typ is known, excluded types."""
        if any(key in self.excluded_members for key in member_keys(member)):
            return True
        return typ is not None and typ in self.excluded_types

    def get_type_printer(self, typ: type) -> Printer | None:
        return self.type_printers.get(typ)

    def get_member_printer(self, member: Member) -> Printer | None:
        return _lookup(self.member_printers, member)

    def get_member_trim(self, member: Member) -> int | None:
        return _lookup(self.member_trims, member)

    def get_culture(self, typ: type) -> Locale | None:
        return self.cultures.get(typ)


# Private Methods ------------------------------------------------------------------------------------------------------

def _lookup(table: Mapping[str, Any], member: Member) -> Any:
    """Value of the most specific key of member found in table."""
    for key in member_keys(member):
        if key in table:
            return table[key]
    return None


def _member_key(cls: type, name: str) -> str:
    if not isinstance(name, str) or not name:
        raise TypeError(f"Member name must be a non-empty str, but found {fmt_value(name)}")
    return member_full_name(cls, name)


def _validate_length(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, but found {fmt_type(value)}")
    if value < 0:
        raise ValueError(f"{name} must be >=0, but found {fmt_value(value)}")


def _validate_printer(printer: Any) -> None:
    if not callable(printer):
        raise TypeError(f"printer must be callable, but found {fmt_type(printer)}")


def _validate_type(typ: Any) -> None:
    if not isinstance(typ, type):
        raise TypeError(f"typ must be a type, but found {fmt_type(typ)}")
