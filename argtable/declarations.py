r"""
argtable declarations and the declaration table.

Overview
- Declaration: one recognized option. Immutable after construction.
  • flag when it has no converter (presence-only),
  • valued when it has a converter (consumes the following token).
- DeclarationTable: ordered, append-only collection of declarations built by
  the caller before parsing. Registration order decides ties: when two
  declarations share a name, the first one registered wins.

Naming
- Long names are always "--" + the given name, short names are always "-" +
  the given name. The declaration id is the given long name.

Every table starts with the built-in help flag (id "help", "--help", "-h").

Quick example:
    >>> table = DeclarationTable("adds numbers")
    >>> table.add_valued("add", "a", "add the given value", int).add_flag("test", "t", "test flag")
    ...
    >>> [declaration.id for declaration in table]
    ['help', 'add', 'test']
"""
import functools
import operator

from .engine import ParsedArgument
from .faults import *
from .utils import *
from .values import Flag, Value


class Declaration(StorageGuard):
    """
    A single option declaration.

    Fields (read-only)
    - id: identifier used as the key of the parsed mapping.
    - long / short: full "--long" and "-short" spellings matched against tokens.
    - descr: short help text.
    - converter: Callable[[str], T] | None; None makes the declaration a flag.
    - default: Flag | Value | None; only used by help output unless the engine
      is asked to fill defaults.
    """

    __introspectable__ = (
        "id",
        "long",
        "short",
        "descr",
        "converter",
        "default",
    )

    def __new__(cls, id, long, short, descr, /, converter=None, default=None):
        for name, object in (("id", id), ("long", long), ("short", short), ("descr", descr)):
            if not isinstance(object, str):
                raise TypeError(f"declaration {name!r} must be a string")
        if converter is not None and not callable(converter):
            raise TypeError("declaration 'converter' must be callable")
        if default is not None and not isinstance(default, Flag | Value):
            raise TypeError("declaration 'default' must be a resolved value")
        if converter is None and isinstance(default, Value):
            raise TypeError("flag declaration cannot have a value default")
        if converter is not None and isinstance(default, Flag):
            raise TypeError("valued declaration cannot have a flag default")

        with super().__new__(cls) as self:
            setattr(self, "-id", id)
            setattr(self, "-long", long)
            setattr(self, "-short", short)
            setattr(self, "-descr", descr)
            setattr(self, "-converter", converter)
            setattr(self, "-default", default)
        return self

    id = view("id")
    long = view("long")
    short = view("short")
    descr = view("descr")
    converter = view("converter")
    default = view("default")

    @property
    def names(self):
        return self.long, self.short

    @property
    def flag(self):
        return self.converter is None

    def matches(self, token, /):
        """Exact string equality against the long or short spelling."""
        return token == self.long or token == self.short

    def accept(self, raw, /):
        """
        Resolve this declaration against its raw value.

        Flags ignore `raw` and resolve to Flag(True). Valued declarations run
        the converter; any exception it raises is captured in the returned
        ParsedArgument instead of propagating.
        """
        if self.converter is None:
            return ParsedArgument(self.id, Flag(True))
        try:
            return ParsedArgument(self.id, Value(self.converter(raw)))
        except Exception as exception:
            return ParsedArgument(self.id, error=exception)

    def __repr__(self):
        return f"declaration({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


class DeclarationTable:
    """
    Ordered, append-only collection of option declarations.

    Operations
    - add_valued(long, short, descr, converter)
    - add_valued_with_default(long, short, descr, default, converter)
    - add_flag(long, short, descr, default=False)
    Each returns the table itself so registrations can be chained.

    Read access
    - iteration / len() in registration order,
    - find(token, flags=False): first declaration named by token,
    - defaults(): {id: default} of every declaration that registered one.
    """

    def __init__(self, description, /):
        if not isinstance(description, str):
            raise TypeError("table description must be a string")
        self._description = description
        self._declarations = [Declaration("help", "--help", "-h", "display help information")]

    @property
    def description(self):
        return self._description

    @property
    def declarations(self):
        return tuple(self._declarations)

    def __iter__(self):
        return iter(tuple(self._declarations))

    def __len__(self):
        return len(self._declarations)

    def trigger(self, fault, /, **options):
        """Surface a registration fault; subclasses merge their runtime flags."""
        trigger(fault, table=self, **options)

    def _register(self, declaration, /):
        for name in declaration.names:
            if (other := self.find(name)) is not None:
                self.trigger(DuplicateNameWarning(
                    "option name %r of %r is already used by %r" % (name, declaration.id, other.id),
                    title="duplicated name",
                    code=FaultCode.DUPLICATED_NAME,
                    input=name,
                    declaration=declaration,
                    hint="%r is shadowed by %r; pick another name for %r" % (name, other.id, declaration.id),
                    docs=getdoc(FaultCode.DUPLICATED_NAME),
                ))
        self._declarations.append(declaration)
        return self

    def add_valued(self, long, short, descr, converter, /):
        """Append a valued declaration without a default."""
        if not callable(converter):
            raise TypeError("add_valued() converter must be callable")
        return self._register(Declaration(long, "--" + long, "-" + short, descr, converter))

    def add_valued_with_default(self, long, short, descr, default, converter, /):
        """Append a valued declaration whose default is Value(default)."""
        if not callable(converter):
            raise TypeError("add_valued_with_default() converter must be callable")
        return self._register(Declaration(long, "--" + long, "-" + short, descr, converter, Value(default)))

    def add_flag(self, long, short, descr, default=False, /):
        """Append a flag declaration whose default is Flag(default)."""
        return self._register(Declaration(long, "--" + long, "-" + short, descr, default=Flag(default)))

    def find(self, token, /, *, flags=False):
        """
        Return the first declaration (registration order) whose long or short
        name equals token, or None. With flags=True, valued declarations are
        skipped.
        """
        for declaration in self._declarations:
            if declaration.matches(token) and (not flags or declaration.flag):
                return declaration
        return None

    def defaults(self):
        return {
            declaration.id: declaration.default
            for declaration in self._declarations
            if declaration.default is not None
        }

    def __repr__(self):
        return f"{type(self).__name__.lower()}(description={self._description!r}, declarations={len(self)})"

    def __rich_repr__(self):
        yield "description", self._description
        yield "declarations", self.declarations


__all__ = (
    "Declaration",
    "DeclarationTable",
)
