"""
Overture resolver: classify tokens, match overloads, bind and dispatch.

Phases
- classify(tokens)
  • one linear pass over the tokens that follow the command name:
    `--name` opens a named group (every following token up to the next
    `--`-prefixed one is a candidate value), `-name` records a flag, anything
    else is positional. Named markers do not consume their values; those
    tokens are still visited, so they are also positional (or flags).
- match(overload, classified)
  • pure per-overload attempt, returns a Binding or a Mismatch.
  • bucket order: named → required → optional scalar → optional variadic.
  • one positional cursor; a named scalar advances it by one (even when its
    marker has no value, leaving the parameter unbound), a named variadic by
    its value count (so values written right after a leading named marker are
    not consumed twice).
  • acceptance requires the cursor to land exactly on the positional count.
- resolve(command, text, tokens)
  • ordered scan over the command's overloads; the first Binding wins.
  • raises NoMatchingOverloadError (with every Mismatch) otherwise.
- dispatch(command, text, tokens)
  • resolve, then call the overload executor with (params, flags). Executor
    exceptions are not caught here.

Bound parameters always carry two synthetic entries: RAW ("__raw__", the
full raw text) and TOKENS ("__tokens__", the full token tuple).
"""
import logging
from types import MappingProxyType
from typing import NamedTuple

from .faults import FaultCode, NoMatchingOverloadError, getdoc
from .utils import Unset, ordinal

logger = logging.getLogger(__name__)

RAW = "__raw__"
TOKENS = "__tokens__"


class Classified(NamedTuple):
    named: MappingProxyType
    flags: frozenset
    positional: tuple


class Binding(NamedTuple):
    """
    Result of a successful match: the overload and everything it receives.
    """
    overload: object
    params: MappingProxyType
    flags: MappingProxyType
    text: str
    tokens: tuple

    def execute(self):
        return self.overload(self.params, self.flags)


class Mismatch(NamedTuple):
    """
    Why one overload rejected the input.

    - code: FaultCode.MISSING_VALUE | PARSER_FAILURE | UNPARSED_TOKENS
    - param: name of the offending parameter (None for leftovers)
    - exception: the parser exception for PARSER_FAILURE, else None
    """
    overload: object
    code: FaultCode
    reason: str
    param: str | None = None
    exception: Exception | None = None


def classify(tokens, /):
    """
    Split argument tokens (command name excluded) into named groups, flags and
    positional values. A repeated `--name` keeps the last group.
    """
    tokens = tuple(tokens)
    named = {}
    flags = set()
    positional = []

    for index, token in enumerate(tokens):
        if token.startswith("--"):
            values = []
            for value in tokens[index + 1:]:
                if value.startswith("--"):
                    break
                values.append(value)
            named[token[2:]] = tuple(values)
        elif token.startswith("-"):
            flags.add(token[1:])
        else:
            positional.append(token)

    return Classified(MappingProxyType(named), frozenset(flags), tuple(positional))


def _order(params, named):
    ordered = [param for param in params if param.name in named]
    ordered += [param for param in params if not param.optional and param not in ordered]
    ordered += [param for param in params if not param.variadic and param not in ordered]
    ordered += [param for param in params if param not in ordered]
    return ordered


def match(overload, classified, /):
    """
    Try to bind one overload against classified input.

    Returns
    - Binding (with empty text/tokens; resolve() fills them in) on success.
    - Mismatch describing the first reason for rejection otherwise.
    """
    named, present, positional = classified

    flags = {flag.name: flag.name in present for flag in overload.flags}

    params = {}
    cursor = 0
    for param in _order(overload.params, named):
        value = Unset
        if param.name in named:
            values = named[param.name]
            if param.variadic:
                value = values
                cursor += len(values)
            else:
                cursor += 1
                if not values:
                    continue
                value = values[0]
        elif param.variadic:
            value = positional[cursor:]
            cursor = len(positional)
        elif cursor < len(positional):
            value = positional[cursor]
            cursor += 1

        if value is Unset:
            if param.optional:
                continue
            return Mismatch(
                overload,
                FaultCode.MISSING_VALUE,
                "missing value for required parameter %r" % param.name,
                param.name,
            )

        try:
            params[param.name] = param(value)
        except Exception as exception:
            return Mismatch(
                overload,
                FaultCode.PARSER_FAILURE,
                "value %r rejected by parameter %r" % (value, param.name),
                param.name,
                exception,
            )

    if cursor != len(positional):
        return Mismatch(
            overload,
            FaultCode.UNPARSED_TOKENS,
            "unexpected positional value from %s position" % ordinal(cursor + 1)
            if cursor < len(positional) else
            "%d named value(s) counted beyond the positional input" % (cursor - len(positional)),
        )

    return Binding(overload, MappingProxyType(params), MappingProxyType(flags), "", ())


def resolve(command, text, tokens, /):
    """
    Find the first overload of `command` matching `tokens` (token 0 is the
    command name) and return its Binding.

    Raises
    - NoMatchingOverloadError: every overload rejected the input; the fault
      carries `command`, `input` and the list of `mismatches`.
    """
    tokens = tuple(tokens)
    classified = classify(tokens[1:])
    mismatches = []

    for index, overload in enumerate(command.overloads, 1):
        result = match(overload, classified)
        if isinstance(result, Binding):
            logger.debug("command %r matched its %s overload", command.name, ordinal(index))
            return result._replace(
                params=MappingProxyType(dict(result.params) | {RAW: text, TOKENS: tokens}),
                text=text,
                tokens=tokens,
            )
        logger.debug("command %r %s overload rejected: %s", command.name, ordinal(index), result.reason)
        mismatches.append(result)

    name = tokens[0] if tokens else command.name
    raise NoMatchingOverloadError(
        "no overload of command %r matches the provided parameters" % name,
        title="no matching overload",
        code=FaultCode.NO_MATCHING_OVERLOAD,
        hint="try 'help %s' to see every accepted form" % name,
        docs=getdoc(FaultCode.NO_MATCHING_OVERLOAD),
        command=command,
        input=text,
        mismatches=tuple(mismatches),
    )


def dispatch(command, text, tokens, /):
    """
    Resolve and run: returns whatever the matched executor returns.
    """
    return resolve(command, text, tokens).execute()


__all__ = (
    "RAW",
    "TOKENS",
    "Classified",
    "Binding",
    "Mismatch",
    "classify",
    "match",
    "resolve",
    "dispatch",
)
