"""
ecp parser: classify raw argument tokens against a definition tree.

Token layout
- index 0: the invoked program (occupies the slot, never matched).
- index 1: the command name.
- index 2: optionally, a subcommand name of that command.
- any token with one or more leading dashes is flag-shaped.
- whatever follows the command, subcommand and flag prefix is a value.

Phases (each failure is terminal, nothing is retried)
1. arity: fewer than 2 tokens -> InvalidInputError.
2. command: tokens[1] must equal a top-level command name -> else InvalidCommandError.
3. subcommand: when tokens[2] exists it must equal a subcommand name of the
   resolved command -> else InvalidCommandError. No tokens[2] means no subcommand.
4. flags: the scope is the subcommand when one was resolved, else the command
   (the two flag sets are never merged). Every flag-shaped token of the whole
   input is stripped of its leading dashes and matched on long name or short
   character; unknown ones are ignored. Zero matches -> InvalidFlagError, even
   when the scope declares no flags at all.
5. values: skip 2 tokens (3 with a subcommand) plus one per recognized flag and
   keep the rest in order. This is a positional shortcut, not a per-token
   classification: a flag placed after a value shifts the cut and is kept as a
   value, while the value it displaced is dropped.

parse() is pure: it reads the tree, never mutates it, performs no I/O and
keeps no state between calls, so one Application can be parsed against from
several threads at once.
"""
import difflib
import logging
import shlex
from collections.abc import Iterable

from .faults import InvalidInputError, InvalidCommandError, InvalidFlagError
from .parsed import ParseResult
from .utils import ordinal

logger = logging.getLogger(__name__)


def _tokenize(tokens):
    """
    Normalize the caller's input into a list of strings.

    - str: shell-like prompt, split with shlex.split.
    - Iterable[str]: used as-is, item by item (nothing is trimmed or dropped).
    """
    if isinstance(tokens, str):
        return shlex.split(tokens)
    if not isinstance(tokens, Iterable):
        raise TypeError("parse() tokens must be a string or an iterable of strings")
    normalized = []
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() tokens must be a string or an iterable of strings")
        normalized.append(token)
    return normalized


def _suggest(input, candidates):
    """Build a hint for an unknown name from the closest candidate names."""
    candidates = list(candidates)
    suggestions = difflib.get_close_matches(input, candidates, 3)
    if suggestions:
        hint = "did you mean %r? expected one of: %s" % (suggestions[0], ", ".join(candidates))
    elif candidates:
        hint = "expected one of: %s" % ", ".join(candidates)
    else:
        hint = "nothing is defined at this level"
    return suggestions, hint


def _resolve_command(application, tokens):
    command = application.find(input := tokens[1])
    if command is None:
        suggestions, hint = _suggest(input, (candidate.name for candidate in application.commands))
        raise InvalidCommandError(
            "Command not found: %s" % input,
            input=input,
            index=2,
            suggestions=suggestions,
            hint="unknown command at %s position; %s" % (ordinal(2), hint),
        )
    logger.debug("resolved command %r", command.name)
    return command


def _resolve_subcommand(command, tokens):
    if len(tokens) < 3:
        logger.debug("no subcommand token after %r", command.name)
        return None
    subcommand = command.find(input := tokens[2])
    if subcommand is None:
        suggestions, hint = _suggest(input, (child.name for child in command.subcommands))
        raise InvalidCommandError(
            "Subcommand not found: %s" % input,
            input=input,
            index=3,
            suggestions=suggestions,
            hint="unknown subcommand of %r at %s position; %s" % (command.name, ordinal(3), hint),
        )
    logger.debug("resolved subcommand %r of %r", subcommand.name, command.name)
    return subcommand


def _resolve_flags(scope, tokens):
    found = []
    for token in tokens:
        if not token.startswith("-"):
            continue
        flag = scope.match(token.lstrip("-"))
        if flag is None:
            logger.debug("ignoring unknown flag-shaped token %r in %r", token, scope.name)
            continue
        found.append(flag.long)

    if not found:
        if scope.flags:
            hint = "pass at least one of: %s" % ", ".join(" / ".join(flag.names) for flag in scope.flags)
        else:
            hint = "%r declares no flags, so it cannot be satisfied" % scope.name
        raise InvalidFlagError("Flags not found", scope=scope.name, hint=hint)

    logger.debug("recognized flags %r in %r", found, scope.name)
    return found


def _resolve_values(tokens, subcommand, flags):
    skip = (2 if subcommand is None else 3) + len(flags)
    return tokens[skip:]


def parse(application, tokens, /):
    """
    Parse raw argument tokens against an application definition.

    Parameters
    - application: the Application to resolve against (read-only).
    - tokens: Iterable[str] laid out as [program, command, subcommand?, ...],
      or a single shell-like string split with shlex.split.

    Returns
    - ParseResult with the command, optional subcommand, flags (long names,
      scan order) and values (input order).

    Raises
    - InvalidInputError: fewer than 2 tokens.
    - InvalidCommandError: unknown command, or unknown subcommand of the
      resolved command (carries the offending token as `input`).
    - InvalidFlagError: no flag of the matching scope was recognized.
    - TypeError: tokens is not a string or an iterable of strings.
    """
    tokens = _tokenize(tokens)
    logger.debug("parsing %d token(s) for %r", len(tokens), application.name)

    if len(tokens) < 2:
        raise InvalidInputError(
            "Expected a command after the program name, got %d argument(s)" % len(tokens),
            index=2,
            hint="pass a command name at %s position" % ordinal(2),
        )

    command = _resolve_command(application, tokens)
    subcommand = _resolve_subcommand(command, tokens)
    flags = _resolve_flags(command if subcommand is None else subcommand, tokens)
    values = _resolve_values(tokens, subcommand, flags)

    return ParseResult(
        command.name,
        None if subcommand is None else subcommand.name,
        flags,
        values,
    )


__all__ = ("parse",)
