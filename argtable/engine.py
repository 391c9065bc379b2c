"""
argtable parse engine.

The engine walks raw command-line tokens against a declaration table and
returns a mapping from declaration id to resolved value. It performs no I/O,
keeps no state between calls and stops at the first fault.

Algorithm
- exactly one token: bare flag lookup. A flag named by the token resolves to
  Flag(True); anything else (a valued option or an unknown token) is an
  UnrecognizedArgumentError.
- otherwise an empty sentinel token is appended and the tokens are walked by
  index:
  • unknown token      → UnrecognizedArgumentError (scan stops)
  • flag               → Flag(True), advance by one
  • valued option      → converter(next token), advance by two; a valued option
                         given last converts the empty sentinel
  • converter failure  → AcceptanceError (scan stops, no mapping returned)
  Later matches of the same id overwrite earlier ones.
- an empty token list scans the sentinel alone and fails with
  UnrecognizedArgumentError("").

Matching is exact: no prefixes, no case folding, no "--name=value".

Declared defaults are documentation-only unless parse(..., defaults=True) is
requested, in which case absent ids are filled after a successful scan.
"""
import difflib
from typing import NamedTuple

from .faults import *


class ParsedArgument(NamedTuple):
    """Transient pairing of a declaration id with its resolution or its error."""
    id: str
    value: object = None
    error: BaseException | None = None


def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _unrecognized(table, token, index):
    names = [name for declaration in table for name in declaration.names]
    suggestions = difflib.get_close_matches(token, names, 5) if token else []
    try:
        hint = "did you mean %r? run with '--help' to see all options" % suggestions[0]
    except IndexError:
        hint = "run with '--help' to see all available options"
    if token:
        message = "unrecognized argument %r at %s position" % (token, _ordinal(index))
    else:
        message = "expected an option at %s position but got nothing" % _ordinal(index)
    return UnrecognizedArgumentError(
        message,
        title="unrecognized argument",
        code=FaultCode.UNRECOGNIZED_ARGUMENT,
        input=token,
        index=index,
        suggestions=suggestions,
        hint=hint,
        docs=getdoc(FaultCode.UNRECOGNIZED_ARGUMENT),
    )


def _rejected(declaration, raw, index, exception):
    typename = getattr(declaration.converter, "__name__", "value")
    if raw:
        message = "value %r for option %r from %s position cannot be accepted" % (
            raw, declaration.id, _ordinal(index)
        )
    else:
        message = "option %r from %s position is missing its value" % (declaration.id, _ordinal(index))
    return AcceptanceError(
        message,
        title="conversion error",
        code=FaultCode.ACCEPTANCE_ERROR,
        input=raw,
        index=index,
        declaration=declaration,
        hint="use a valid %s for %r (for example: %s <value>)" % (typename, declaration.long, declaration.long),
        docs=getdoc(FaultCode.ACCEPTANCE_ERROR),
        exception=exception,
    )


def parse(table, tokens, /, *, defaults=False):
    """
    Parse `tokens` against `table`.

    Parameters
    - table: iterable of declarations in registration order, providing
      find(token, *, flags=False) (see DeclarationTable).
    - tokens: iterable of raw strings, program name already stripped.
    - defaults: when True, ids absent from the input resolve to their
      registered defaults.

    Returns
    - dict[str, Flag | Value]

    Raises
    - UnrecognizedArgumentError: a token names no declaration.
    - AcceptanceError: a converter rejected its value (the converter's
      exception is available as .error and as __cause__).
    """
    tokens = list(tokens)

    if len(tokens) == 1:
        token, = tokens
        if (declaration := table.find(token, flags=True)) is None:
            raise _unrecognized(table, token, 1)
        result = {declaration.id: declaration.accept("").value}
        return _fill(table, result) if defaults else result

    tokens.append("")  # sentinel
    count = max(len(tokens) - 1, 1)

    result = {}
    index = 0
    while index < count:
        token = tokens[index]
        if (declaration := table.find(token)) is None:
            raise _unrecognized(table, token, index + 1)

        if declaration.flag:
            argument = declaration.accept("")
            index += 1
        else:
            raw = tokens[index + 1] if index + 1 < len(tokens) else ""
            argument = declaration.accept(raw)
            if argument.error is not None:
                raise _rejected(declaration, raw, index + 1, argument.error) from argument.error
            index += 2

        result[argument.id] = argument.value

    return _fill(table, result) if defaults else result


def _fill(table, result, /):
    for declaration in table:
        if declaration.default is not None and declaration.id not in result:
            result[declaration.id] = declaration.default
    return result


__all__ = (
    "ParsedArgument",
    "parse",
)
