"""
Overture command layer: overloads and commands.

What this module provides
- Overload: one candidate signature of a command (help text, ordered params,
  ordered flags) bound to an executor `executor(params, flags)`.
- overload(...): decorator that builds an Overload around the decorated
  executor.
- Command: a named, ordered list of overloads plus aliases and visibility,
  able to resolve and dispatch a line of input.

Core ideas
- Overloads are tried in declaration order; that order is the tie-break.
- Descriptors are immutable once built: every field is served through a
  read-only property (tuples / mapping proxies).
- Commands do not execute anything themselves; they hand a Binding to the
  executor of the winning overload.

Quick start
    from overture import Command, Param, Flag, overload

    @overload("Changes the current working directory.", [Param("path", "The path to change to.")])
    def cd(params, flags):
        print("cd", params["path"])

    @overload("Shows the current working directory.")
    def pwd(params, flags):
        print("/")

    location = Command("cd", cd, pwd, aliases=("chdir",))
    location.dispatch("cd /tmp")
"""
import functools
import operator
import re

from .arguments import Param, Flag
from .resolver import resolve, dispatch
from .tokens import tokenize
from .utils import *


class CommandType(type):
    """
    Metaclass that gives Overload/Command stable introspection.

    Responsibilities
    - Derive __typename__ from the class name ("Overload" → "overload").
    - Expose every name in __introspectable__ as a read-only property.
    - Provide __repr__/__rich_repr__ driven by __displayable__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _process_help(cls, metadata):
    if not isinstance(help := metadata["help"], str):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    elif not (help := help.strip()):
        raise ValueError(f"{cls.__typename__} 'help' cannot be empty")
    metadata["help"] = help


def _process_members(cls, metadata, key, kind):
    """
    Validate an ordered collection of descriptors (params or flags).

    Rules
    - must be an iterable of `kind` instances.
    - names must be unique within the collection.
    """
    try:
        members = list(metadata[key])
    except TypeError:
        raise TypeError(f"{cls.__typename__} '{key}' must be iterable") from None

    names = set()
    for member in members:
        if not isinstance(member, kind):
            raise TypeError(f"{cls.__typename__} '{key}' must only contain {kind.__typename__} objects")
        if member.name in names:
            raise ValueError(f"{cls.__typename__} {kind.__typename__} name {member.name!r} is duplicated")
        names.add(member.name)

    metadata[key] = tuple(members)


class Overload(metaclass=CommandType):
    """
    One candidate signature of a command.

    Calling an overload runs its executor with the bound parameters and
    flags; without an executor the call is a no-op returning None.
    """

    __introspectable__ = (
        "help",
        "params",
        "flags",
        "executor",
    )
    __displayable__ = (
        "help",
        "params",
        "flags",
    )

    def __init__(self, help, /, params=(), flags=(), executor=Unset):
        """
        Parameters
        - help: str
          Text describing what this overload does.
        - params: Iterable[Param]
          Parameters in declaration order (names unique).
        - flags: Iterable[Flag]
          Flags in declaration order (names unique).
        - executor: Callable[[Mapping, Mapping], Any] | Unset
          Receives (params, flags) when this overload wins.
        """
        metadata = {
            "help": help,
            "params": params,
            "flags": flags,
            "executor": executor,
        }
        _process_help(type(self), metadata)
        _process_members(type(self), metadata, "params", Param)
        _process_members(type(self), metadata, "flags", Flag)

        if executor is not Unset and not callable(executor):
            raise TypeError(f"{type(self).__typename__} 'executor' must be callable")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __call__(self, params, flags, /):
        if self._executor is Unset:
            return
        return self._executor(params, flags)


def overload(help, /, params=(), flags=()):
    """
    Decorator/factory binding an executor to a new Overload.

    Usage
        @overload("Outputs the provided text.", [Param("text", variadic=True)])
        def echo(params, flags): ...

    The decorated name becomes the Overload instance (callable as before).
    """
    def wrapper(executor, /):
        if not callable(executor):
            raise TypeError("@overload() must be applied to a callable")
        return Overload(help, params, flags, executor)

    return rename(wrapper, "overload")


class Command(metaclass=CommandType):
    """
    A named command: ordered overloads, aliases and visibility.

    Responsibilities
    - Introspection: name, overloads, aliases and hidden as read-only fields.
    - Resolution: resolve(text) picks the first overload matching the input.
    - Dispatch: dispatch(text) resolves then runs the winning executor.

    Notes
    - hidden commands are left out of summary listings only; they are still
      invocable and describable in detail.
    - name is the canonical name the command is registered under by
      Registry.include(); Registry.register(name, command) may use any name.
    """

    __introspectable__ = (
        "name",
        "overloads",
        "aliases",
        "hidden",
    )

    def __init__(self, name, /, *overloads, aliases=(), hidden=False):
        """
        Parameters
        - name: str
          Canonical name; non-empty and without whitespace.
        - *overloads: Overload
          At least one, tried in the given order.
        - aliases: Iterable[str]
          Alternative lookup names (unique, distinct from name).
        - hidden: bool
          Exclude from summary help listings.
        """
        typename = type(self).__typename__
        if not isinstance(name, str):
            raise TypeError(f"{typename} 'name' must be a string")
        elif not name or re.search(r"\s", name):
            raise ValueError(f"{typename} 'name' must be a non-empty string without whitespace")

        if not overloads:
            raise TypeError(f"{typename} must declare at least one overload")
        for object in overloads:
            if not isinstance(object, Overload):
                raise TypeError(f"{typename} overloads must be overload objects")

        if isinstance(aliases, str):
            raise TypeError(f"{typename} 'aliases' must be an iterable of strings, not a string")
        seen = {name}
        for alias in (aliases := tuple(aliases)):
            if not isinstance(alias, str):
                raise TypeError(f"{typename} aliases must be strings")
            elif not alias or re.search(r"\s", alias):
                raise ValueError(f"{typename} aliases must be non-empty strings without whitespace")
            elif alias in seen:
                raise ValueError(f"{typename} alias {alias!r} is duplicated or equal to the name")
            seen.add(alias)

        self._name = name
        self._overloads = overloads
        self._aliases = aliases
        self._hidden = bool(hidden)

    def resolve(self, text, tokens=Unset, /):
        """
        Return the Binding of the first matching overload.

        - text: the raw line (recorded as params["__raw__"]).
        - tokens: pre-tokenized line (token 0 is the command name); when Unset,
          the text is tokenized here.
        """
        return resolve(self, text, tokenize(text) if tokens is Unset else tokens)

    def dispatch(self, text, tokens=Unset, /):
        """
        Resolve and run; returns the executor's result.

        Faults
        - NoMatchingOverloadError when no overload accepts the input.
        - executor exceptions propagate unmodified.
        """
        return dispatch(self, text, tokenize(text) if tokens is Unset else tokens)


__all__ = (
    "Overload",
    "overload",
    "Command",
)

del CommandType
