"""
argtable utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the declaration table, the engine and the
  renderers. Stable enough for consumers, designed for internal use.

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided" without conflating with None.
  • Falsey, printable as "Unset", non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; None/0/""/[] are preserved.

- rename(callable, name)
  • Assign stable __name__/__qualname__ to generated callables.

- StorageGuard / view("field")
  • Guarded backing storage written once at construction, exposed through
    read-only properties.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from contextlib import contextmanager
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process-wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    - final: subclassing is forbidden (see __init_subclass__).
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are returned as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return default if object is Unset else object


def rename(callable, name, /):
    """
    Set a stable __name__/__qualname__ on a callable (updated in place).
    """
    if not builtins.callable(callable):
        raise TypeError("rename() first argument must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() second argument must be a string")
    try:
        callable.__qualname__ = name
        callable.__name__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() first argument must be a updatable callable") from None
    return callable


class StorageGuard:
    """
    internal mixin to protect backing storage and control mutation.

    rules
    - any attribute whose name starts with '-' is backing storage:
      • it cannot be read through normal attribute access,
      • it can only be written while the instance is being built.

    build phase
    - __new__ is a context manager; backing fields are writable inside it:
        with super().__new__(cls) as self:
            setattr(self, "-field", value)
        # after the 'with' block the fields are locked.
    """
    __slots__ = ("__building",)

    @contextmanager
    def __new__(cls):
        self = super().__new__(cls)
        self.__building = True
        try:
            yield self
        finally:
            self.__building = False

    def __getattribute__(self, name, /):
        if isinstance(name, str) and name.startswith("-"):
            raise AttributeError("internal storage is not accessible")
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if isinstance(name, str) and name.startswith("-"):
            if not self.__building:
                raise AttributeError("internal storage is read-only")
        return object.__setattr__(self, name, value)


def view(name, /):
    """
    internal: build a read-only property over the backing field "-{name}".

    containers come back as immutable snapshots:
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    """

    def getter(self):
        value = object.__getattribute__(self, "-" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(rename(getter, name))


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "StorageGuard",
    "view",
)
