"""
argtable parser: the declaration table wired to the engine, help and faults.

Quick start
    from argtable import Parser

    parser = Parser("adds numbers", shell=True)
    parser.add_valued("add", "a", "add the given value", int)
    parser.add_flag("test", "t", "test flag", False)

    if __name__ == "__main__":
        print(parser.run())  # reads sys.argv[1:]

Runtime flags
- shell: print faults (and the help screen) to stderr and exit with status 1
  instead of raising them.
- fancy: render help and faults inside rich panels.
- colorful: apply the palettes (override them with __main__.__styles__).
- defaults: fill absent options with their registered defaults.
- prog: program name shown in headers (falls back to __main__.__prog__, then
  to the basename of sys.argv[0]).
"""
import os.path
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from . import engine, helper
from .declarations import DeclarationTable
from .faults import *
from .utils import *
from .values import Flag


class Parser(DeclarationTable):
    """
    Declaration table that knows how to parse, render help and surface faults.
    """

    def __init__(self, description, /, *, prog=Unset, shell=False, fancy=False, colorful=True, defaults=False):
        super().__init__(description)
        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")
        self._prog = prog
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._defaults = bool(defaults)

    @property
    def prog(self):
        if self._prog is not Unset:
            return self._prog
        if (prog := getattr(__import__("__main__"), "__prog__", Unset)) is not Unset:
            return prog
        return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "argtable"

    @property
    def shell(self):
        return self._shell

    @property
    def fancy(self):
        return self._fancy

    @property
    def colorful(self):
        return self._colorful

    @property
    def defaults_enabled(self):
        return self._defaults

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime flags merged in.

        In shell mode, errors print the help screen to stderr before the
        fault itself is rendered and the process exits.
        """
        if self._shell and isinstance(fault, ArgumentError):
            self.print_help(stderr=True)
        trigger(
            fault,
            **options,
            table=self,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def print_help(self, *, stderr=False):
        """Print the help screen (stdout unless stderr=True)."""
        Console(stderr=stderr).print(
            helper.render(self, prog=self.prog, colorful=self._colorful, fancy=self._fancy)
        )

    def parse(self, tokens=Unset, /):
        """
        Parse tokens into {id: Flag | Value}.

        Parameters
        - tokens:
          • Unset: read sys.argv[1:].
          • str: shell-like string, split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.

        Raises
        - TypeError: tokens is not Unset/str/Iterable[str].
        - UnrecognizedArgumentError / AcceptanceError outside shell mode.
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif isinstance(tokens, Iterable):
            tokens = list(tokens)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        try:
            return engine.parse(self, tokens, defaults=self._defaults)
        except ArgumentError as fault:
            self.trigger(fault)

    def run(self, tokens=Unset, /):
        """
        Parse tokens; when help was requested print it and exit with status 0,
        otherwise return the parsed mapping.
        """
        result = self.parse(tokens)
        if result.get("help") == Flag(True):
            self.print_help()
            sys.exit(0)
        return result

    def __repr__(self):
        return f"parser(description={self.description!r}, prog={self.prog!r}, declarations={len(self)})"


__all__ = (
    "Parser",
)
