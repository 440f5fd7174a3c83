r"""
Overture parameter and flag descriptors.

Overview
- Param[_T]: value-bearing parameter of an overload. Matched by position or by
  a `--name` marker, optionally optional and/or variadic, converted through a
  value-parser.
- Flag: presence-only switch of an overload, spelled `-name` on the line.
- identifier(text): stock value-parser for variable-like names.

Introspection & representation
- ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
  the fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- name: str matching r"[^\W\d_][\w-]*" (no leading underscore or digit, so
  names never collide with the synthetic "__raw__"/"__tokens__" keys).
- descr: Unset | str, trimmed, non-empty when provided (defaults to None).
- Param only:
  • optional: bool (missing value leaves the parameter unbound).
  • variadic: bool (the parser receives a tuple of strings).
  • parser: Callable (defaults to the identity).

Quick example:
    >>> path = Param("path", "The path to change to.")
    >>> rest = Param("text", "The text to echo.", variadic=True)
    >>> verbose = Flag("v", "Verbose output.")
"""
import functools
import operator
import re

from rich.text import Text

from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns descriptor classes into introspectable value objects.

    Responsibilities
    - Derive __typename__ from the class name ("Param" → "param").
    - Expose every name in __introspectable__ as a read-only property backed by
      the "_{name}" instance attribute.
    - Provide __repr__/__rich_repr__ driven by __displayable__ (or
      __introspectable__ when unset).
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
            """
            Return a concise, stable representation with key metadata.

            Example
            - param(name='path', descr='The path to change to.', ...)
            """
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


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the shared 'name' and 'descr' fields.

    Raises
    - TypeError: name/descr of the wrong type.
    - ValueError: empty (after trimming) or malformed name, empty descr.

    Notes
    - Mutates the provided metadata dict in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\W\d_][\w-]*", name):
        raise ValueError(f"{cls.__typename__} 'name' must start with a letter and hold only letters, digits, '_' or '-'")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


class Param[_T](metaclass=ArgumentType):
    """
    Value-bearing parameter of an overload.

    A Param is bound either by a `--name` marker (explicitly named) or from the
    positional tokens, following the bucket order used by the resolver: named,
    then required, then optional scalars, then optional variadics.

    Calling a Param with a raw value runs its parser:
    - scalar:   param("42")         → parser("42")
    - variadic: param(("a", "b"))   → parser(("a", "b"))
    Any exception raised by the parser propagates to the caller; the resolver
    turns it into a rejection of the overload being tried.
    """

    __introspectable__ = (
        "name",
        "descr",
        "optional",
        "variadic",
        "parser",
    )
    __displayable__ = (
        "name",
        "descr",
        "optional",
        "variadic",
    )

    def __init__(self, name, descr=Unset, /, *, optional=False, variadic=False, parser=Unset):
        """
        Parameters
        - name: str
          Unique within an overload; also the `--name` marker spelling.
        - descr: Unset | str
          Short help text. Becomes None when Unset.
        - optional: bool
          When no value is available the parameter stays unbound.
        - variadic: bool
          Consumes the remaining positional tokens (or every value after its
          named marker) as a tuple.
        - parser: Callable
          Converter/validator applied to the raw value; identity by default.
        """
        metadata = {
            "name": name,
            "descr": descr,
            "optional": bool(optional),
            "variadic": bool(variadic),
            "parser": coalesce(parser, _identity),
        }
        _sanitize_metadata(type(self), metadata)

        if not callable(metadata["parser"]):
            raise TypeError(f"{type(self).__typename__} 'parser' must be callable")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __call__(self, value, /):
        if self.variadic:
            value = tuple(value)
        return self._parser(value)


class Flag(metaclass=ArgumentType):
    """
    Presence-only switch of an overload (`-name` on the line).

    Flags carry no value: a declared flag binds to True when its marker is
    present and to False otherwise.
    """

    __introspectable__ = (
        "name",
        "descr",
    )

    def __init__(self, name, descr=Unset, /):
        metadata = {
            "name": name,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


def _identity(value, /):
    return value


def identifier(text, /):
    """
    Stock value-parser accepting identifier-like names (letters, digits and
    underscores, not starting with a digit).

    Raises
    - ValueError: for anything else.
    """
    if not isinstance(text, str) or not re.fullmatch(r"[^\W\d]\w*", text):
        raise ValueError("invalid identifier %r" % (text,))
    return text


__all__ = (
    # Classes (descriptors)
    "Param",
    "Flag",

    # Value-parsers
    "identifier",
)

del ArgumentType
