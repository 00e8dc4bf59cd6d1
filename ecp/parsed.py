"""
ecp parse result.

ParseResult is the structured outcome of a successful parse: the matched
command name, the optional subcommand name, the recognized flags (always by
their long name, in scan order) and the positional values (in input order).

It holds plain strings only, with no reference back to the definition tree,
so it stays valid whatever happens to the Application afterwards. Sequences
come back as tuples: they can be iterated any number of times and cannot be
mutated.

    >>> result = app.parse(["ecp", "cargo", "run", "-r", "port"])
    >>> result.command, result.subcommand
    ('cargo', 'run')
    >>> "release" in result.flags
    True
"""
from .utils import mirror


class ParseResult:
    __slots__ = ("_command", "_subcommand", "_flags", "_values")

    def __init__(self, command, subcommand, flags, values):
        self._command = str(command)
        self._subcommand = None if subcommand is None else str(subcommand)
        self._flags = tuple(map(str, flags))
        self._values = tuple(map(str, values))

    command = mirror("command")
    subcommand = mirror("subcommand")
    flags = mirror("flags")
    values = mirror("values")

    def __eq__(self, other):
        if not isinstance(other, ParseResult):
            return NotImplemented
        return (
            self._command == other._command and
            self._subcommand == other._subcommand and
            self._flags == other._flags and
            self._values == other._values
        )

    def __hash__(self):
        return hash((self._command, self._subcommand, self._flags, self._values))

    def __rich_repr__(self):
        yield "command", self._command
        yield "subcommand", self._subcommand
        yield "flags", self._flags
        yield "values", self._values

    def __repr__(self):
        return "parse-result(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = ("ParseResult",)
