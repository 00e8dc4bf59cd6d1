"""
ecp shell shim: the process boundary around the pure parser.

- arguments(): read the process arguments once, as text.
- invoke(application, prompt=Unset): parse and, on a fault, print it to
  stderr and exit with status 1.

Everything that touches sys.argv, stderr or the exit status lives here, so
ecp.parser stays free of process side effects.
"""
import logging
import sys

from .faults import ParseError, InputOutputError, trigger
from .parser import parse
from .utils import Unset, ordinal

logger = logging.getLogger(__name__)


def arguments():
    """
    Return the process arguments (program name first) as a list of strings.

    Raises
    - InputOutputError: when an argument cannot be represented as text
      (undecodable bytes surface in sys.argv as lone surrogates). The
      underlying UnicodeEncodeError is chained as __cause__.
    """
    tokens = list(sys.argv)
    for index, token in enumerate(tokens, 1):
        try:
            token.encode("utf-8")
        except UnicodeEncodeError as error:
            raise InputOutputError(
                "Argument at %s position is not valid unicode: %s" % (ordinal(index), error),
                error=error,
                index=index,
                hint="pass arguments encoded as utf-8",
            ) from error
    logger.debug("acquired %d process argument(s)", len(tokens))
    return tokens


def invoke(application, prompt=Unset, /):
    """
    Convenience runner: parse, or report the fault and terminate.

    Parameters
    - application: the Application to parse against.
    - prompt:
      • Unset: read the process arguments (see arguments()).
      • str: shell-like string, split with shlex.split.
      • Iterable[str]: pre-tokenized sequence.

    Returns
    - the ParseResult on success.

    Behavior
    - any ParseError (including InputOutputError from the argument read) is
      rendered through rich on stderr and the process exits with status 1.
    """
    try:
        return parse(application, arguments() if prompt is Unset else prompt)
    except ParseError as fault:
        logger.debug("parse failed with %s", type(fault).__name__)
        trigger(fault, prog=application.name, colorful=application.colorful, fancy=application.fancy)


__all__ = (
    "arguments",
    "invoke",
)
