"""
argtable resolved values.

A parsed option resolves to exactly one of two variants:

- Flag(state): a presence-only option; the engine produces Flag(True) when the
  option appears, declarations store Flag(default) for help output.
- Value(value): the result of a valued option's converter.

The variants are a closed tagged union: Flag(True) and Value(True) never
compare equal, both are immutable and hashable, and both render through rich.

Quick example:
    >>> Flag(True)
    Flag(True)
    >>> Value(5) == Value(5)
    True
    >>> Value(True) == Flag(True)
    False
"""
from typing import final

from rich.text import Text


class _Resolved:
    """
    Shared behaviour of the resolved-value variants.

    Subclasses declare a single payload slot through __field__; equality and
    hashing take the concrete variant into account.
    """
    __slots__ = ()
    __field__ = ""

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.__typename__ = cls.__name__.lower()

    @property
    def payload(self):
        return object.__getattribute__(self, "_" + type(self).__field__)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def __eq__(self, other, /):
        if type(other) is not type(self):
            return NotImplemented
        return self.payload == other.payload

    def __hash__(self):
        return hash((type(self).__name__, self.payload))

    def __repr__(self):
        return f"{type(self).__name__}({self.payload!r})"

    def __rich_repr__(self):
        yield self.payload

    def __reduce__(self):
        return type(self), (self.payload,)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self


@final
class Flag(_Resolved):
    """Presence-only resolution; `state` is True when the option was given."""
    __slots__ = ("_state",)
    __field__ = "state"

    def __init__(self, state, /):
        if not isinstance(state, bool):
            raise TypeError("flag state must be a boolean")
        object.__setattr__(self, "_state", state)

    @property
    def state(self):
        return self._state

    def __bool__(self):
        return self._state

    def __rich__(self):
        return Text.assemble("Flag(", (str(self._state).lower(), "bold magenta"), ")")


@final
class Value[_T](_Resolved):
    """Converted payload of a valued option."""
    __slots__ = ("_value",)
    __field__ = "value"

    def __init__(self, value, /):
        object.__setattr__(self, "_value", value)

    @property
    def value(self):
        return self._value

    def __rich__(self):
        return Text.assemble("Value(", (repr(self._value), "bold yellow"), ")")


type ResolvedValue[_T] = Flag | Value[_T]


__all__ = (
    "Flag",
    "Value",
    "ResolvedValue",
)
