"""
Object Printing utilities shared across the package.

Contains naming helpers used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
        >>> class Person: ...
        >>> class_name(Person())
        'Person'
    """
    cls = obj if isinstance(obj, type) else obj.__class__

    if cls.__module__ == "builtins":
        qualify = fully_qualified_builtins
    else:
        qualify = fully_qualified

    if qualify:
        return cls.__module__ + "." + cls.__qualname__
    return cls.__name__


def qualified_name(cls: type, name: str) -> str:
    """
    Return the dotted identity of attribute `name` owned by `cls`.

    Used as the lookup key of per-member configuration.

    Examples:
        >>> class Person: ...
        >>> qualified_name(Person, "age")
        '__main__.Person.age'
    """
    return f"{cls.__module__}.{cls.__qualname__}.{name}"


def fmt_type(obj: Any) -> str:
    """Format the type of obj (or obj itself if it is a type) for exception messages, e.g. '<int>'."""
    return f"<{class_name(obj)}>"


def fmt_value(obj: Any, max_repr: int = 80) -> str:
    """
    Format obj as a type-value pair for exception messages, e.g. '<int: 42>'.

    Broken __repr__ methods do not raise; long reprs are cut to max_repr characters.
    """
    try:
        repr_ = repr(obj)
    except Exception as e:
        repr_ = f"repr failed: {type(e).__name__}"
    if len(repr_) > max_repr:
        repr_ = repr_[:max_repr] + "..."
    return f"<{class_name(obj)}: {repr_}>"
