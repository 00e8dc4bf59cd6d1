"""
ecp definition tree: Flag, Command and Application builders.

Overview
- Flag: a recognizable option, matched as `--long` or `-c`.
- Command: a named, invocable unit owning ordered subcommands and flags. A
  subcommand is just a Command nested inside its parent's subcommand list.
- Application: the root container (name, version, description, commands).

Building
- Every fluent setter mutates exactly one field of the receiver and returns
  the receiver, so a whole tree can be declared in one chained expression:

    >>> app = (
    ...     Application("rust")
    ...     .version("0.1.0")
    ...     .command(
    ...         Command("cargo")
    ...         .subcommand(Command("run").flag(Flag("release").short("r")))
    ...     )
    ... )

- Setters only check types. Duplicate names, empty strings and clashing short
  forms are accepted; Application.validate() is the opt-in pass that rejects
  them once the tree is complete.

Introspection
- DefinitionType exposes every name in __introspectable__ as a read-only
  property backed by "_{name}" (containers come back as tuples), and gives
  all definitions a stable __repr__ plus a rich-friendly __rich_repr__.
"""
import functools
import operator
import re

from .parser import parse
from .shell import arguments, invoke
from .utils import *


class DefinitionType(type):
    """
    Metaclass shared by the definition tree nodes.

    Responsibilities
    - Derive __typename__ from the class name ("Application" -> "application")
      for consistent wording in messages.
    - Expose read-only mirrors for the names listed in __introspectable__.
    - Provide __repr__/__rich_repr__ driven by __introspectable__.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = rename(__repr__, "__repr__")

        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = rename(__rich_repr__, "__rich_repr__")

        return self


def _check_text(self, field, value, /):
    if not isinstance(value, str):
        raise TypeError(f"{type(self).__typename__} {field} must be a string")
    return value


class Flag(metaclass=DefinitionType):
    """
    Named, presence-only option.

    A flag is recognized in a token with one or more leading dashes: the
    dashes are stripped and the remainder must equal `long`, or equal the
    single `shorthand` character when one was set with short().
    """

    __introspectable__ = (
        "long",
        "shorthand",
        "descr",
    )

    def __init__(self, long, /):
        self._long = _check_text(self, "long name", long)
        self._shorthand = None
        self._descr = None

    @property
    def names(self):
        """spelled forms of this flag, long first: ("--release", "-r")."""
        if self._shorthand is None:
            return ("--" + self._long,)
        return ("--" + self._long, "-" + self._shorthand)

    def description(self, description, /):
        self._descr = _check_text(self, "description", description)
        return self

    def short(self, short, /):
        if not isinstance(short, str):
            raise TypeError(f"{type(self).__typename__} short form must be a string")
        if len(short) != 1:
            raise ValueError(f"{type(self).__typename__} short form must be a single character")
        self._shorthand = short
        return self

    def matches(self, text, /):
        """
        Tell whether a dash-stripped token names this flag.

        An empty remainder (a bare "-" or "--") never matches.
        """
        if not text:
            return False
        return text == self._long or text == self._shorthand


class Command(metaclass=DefinitionType):
    """
    Named, invocable unit; also the type of every subcommand.

    Only one level of nesting is ever reached by the parser: the token after
    the command name is looked up among `subcommands`, deeper children are
    stored but never consulted. `flags` is the matching scope when no
    subcommand was resolved.
    """

    __introspectable__ = (
        "name",
        "descr",
        "subcommands",
        "flags",
    )

    def __init__(self, name, /):
        self._name = _check_text(self, "name", name)
        self._descr = None
        self._subcommands = []
        self._flags = []

    def description(self, description, /):
        self._descr = _check_text(self, "description", description)
        return self

    def subcommand(self, subcommand, /):
        if not isinstance(subcommand, Command):
            raise TypeError(f"{type(self).__typename__} subcommand must be a command")
        self._subcommands.append(subcommand)
        return self

    def flag(self, flag, /):
        if not isinstance(flag, Flag):
            raise TypeError(f"{type(self).__typename__} flag must be a flag")
        self._flags.append(flag)
        return self

    def find(self, name, /):
        """Return the first subcommand named exactly `name`, or None."""
        return next((child for child in self._subcommands if child.name == name), None)

    def match(self, text, /):
        """Return the first flag of this scope matching a dash-stripped token, or None."""
        return next((flag for flag in self._flags if flag.matches(text)), None)


class Application(metaclass=DefinitionType):
    """
    Root of the definition tree.

    Metadata (name, version, description) has no effect on parsing. The
    keyword-only `colorful` and `fancy` switches only shape how faults are
    rendered by run().

    Entry points
    - parse(tokens): pure and fallible; raises a ParseError subclass.
    - try_run(): like parse() but reads the process arguments.
    - run(): like try_run() but prints the fault and exits with status 1.
    """

    __introspectable__ = (
        "name",
        "revision",
        "descr",
        "commands",
        "colorful",
        "fancy",
    )

    def __init__(self, name, /, *, colorful=True, fancy=False):
        self._name = _check_text(self, "name", name)
        self._revision = None
        self._descr = None
        self._commands = []
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

    def version(self, version, /):
        self._revision = _check_text(self, "version", version)
        return self

    def description(self, description, /):
        self._descr = _check_text(self, "description", description)
        return self

    def command(self, command, /):
        if not isinstance(command, Command):
            raise TypeError(f"{type(self).__typename__} command must be a command")
        self._commands.append(command)
        return self

    def find(self, name, /):
        """Return the first top-level command named exactly `name`, or None."""
        return next((command for command in self._commands if command.name == name), None)

    def validate(self):
        """
        Walk the finished tree once and reject ambiguous definitions.

        Checks
        - command and subcommand names are non-empty and unique among siblings.
        - within each scope (every command and subcommand), flag long names are
          non-empty and unique, and short characters are unique.

        Returns
        - the application itself, so validate() can close a builder chain.

        Raises
        - ValueError: on the first collision found, naming the offending scope.
        """
        def walk(commands, route):
            names = set()
            for command in commands:
                path = route + (command.name,)
                if not command.name:
                    raise ValueError(f"command name cannot be empty (under {' '.join(route)!r})")
                if command.name in names:
                    typeof = "subcommand" if len(route) > 1 else "command"
                    raise ValueError(f"{typeof} name {command.name!r} is already in use")
                names.add(command.name)

                longs, shorts = set(), set()
                for flag in command.flags:
                    if not flag.long:
                        raise ValueError(f"flag long name cannot be empty in {' '.join(path)!r}")
                    if flag.long in longs:
                        raise ValueError(f"flag '--{flag.long}' is already in use in {' '.join(path)!r}")
                    if flag.shorthand is not None and flag.shorthand in shorts:
                        raise ValueError(f"flag '-{flag.shorthand}' is already in use in {' '.join(path)!r}")
                    longs.add(flag.long)
                    if flag.shorthand is not None:
                        shorts.add(flag.shorthand)

                walk(command.subcommands, path)

        walk(self._commands, (self._name,))
        return self

    def parse(self, tokens, /):
        return parse(self, tokens)

    def try_run(self):
        return parse(self, arguments())

    def run(self):
        return invoke(self)


__all__ = (
    "Flag",
    "Command",
    "Application",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del DefinitionType
