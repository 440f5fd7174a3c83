"""
Overture utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the descriptor, registry and resolver layers.
- Stable enough for consumers, but designed primarily for the package itself.

Overview
- UnsetType / Unset
  • Singleton sentinel for “value not provided”, distinct from None.
  • Falsey, printable as "Unset", non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; keep None/0/""/[] untouched.

- rename(callable, name) / @rename("name")
  • Give generated callables a stable __name__/__qualname__.

- mirror("attr")
  • Read-only property over a private backing field (self._attr), served as a
    frozen view (tuple / mapping proxy / frozenset) for containers.

- ordinal(number)
  • "first", "second", ..., "11th", "22nd" for position-first messages.

- pluralize(text)
  • Tiny English pluralizer for labels ("alias" → "aliases").

- mglob(pattern)
  • Expand "pkg.**.commands" style module globs into importable module names.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> ordinal(3), ordinal(12), ordinal(23)
    ('third', '12th', '23rd')
"""
import builtins
import functools
import importlib
import pkgutil
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a process-wide singleton.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in runtime checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns `object` unless it is Unset, in which case `default` is returned.
    Falsey values such as None, 0, "" or () are preserved as-is.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name)           -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Shallow read-only view of a container.

    - Sequence (non-string) → tuple
    - Mapping               → MappingProxyType
    - Set                   → frozenset
    - anything else         → as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" from the instance and serves a frozen view
    of it, so descriptors stay immutable through the public API.

    Example
    - Given self._params, declare params = mirror("params").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes.
    """
    try:
        return (
            "first", "second", "third", "fourth", "fifth",
            "sixth", "seventh", "eighth", "ninth", "tenth",
        )[number - 1] if number > 0 else f"{number}th"
    except IndexError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, ...)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


@functools.cache
def pluralize(text, /):
    """
    Best-effort English pluralizer for labels.

    Only the last word of a phrase is pluralized; casing of that word is kept.

    Examples
    - pluralize("alias")         -> "aliases"
    - pluralize("overload")      -> "overloads"
    - pluralize("Flag")          -> "Flags"
    - pluralize("command entry") -> "command entries"
    """
    if not isinstance(text, str):
        raise TypeError("pluralize() argument must be a string")

    if not (match := re.search(r'(\S+)(\s*)$', text)):
        return text

    head, last, trail = text[:match.start(1)], match.group(1), match.group(2)
    lower = last.lower()

    if lower.endswith(("s", "sh", "ch", "x", "z")):
        plural = lower + "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        plural = lower[:-1] + "ies"
    else:
        plural = lower + "s"

    if last.isupper():
        plural = plural.upper()
    elif last[:1].isupper():
        plural = plural[:1].upper() + plural[1:]

    return head + plural + trail


@functools.cache
def _pattern(source):
    """
    compile a module glob: '**' spans whole segments, '*' and '?' stay within
    one segment.
    """
    body = []
    for segment in source.split('.'):
        if segment == '**':
            body.append(r'(?:\.(?!\d)\w+)*')
            continue
        pieces = re.split(r'(\*|\?)', segment)
        body.append(r'\.' + ''.join({'*': r'[^.]*', '?': r'[^.]'}.get(piece, re.escape(piece)) for piece in pieces))
    return re.compile(''.join(body).removeprefix(r'\.'))


def mglob(source, /):
    """
    Expand a dotted module glob into the importable module names it matches.

    - a name without wildcards comes back as-is: [source].
    - the leading concrete segments are imported; an unimportable prefix
      matches nothing.
    - results are sorted.

    Examples
    - "app.commands.*"      → direct children of app.commands
    - "app.**.commands"     → any commands module under app
    """
    if not isinstance(source, str):
        raise TypeError("mglob() argument must be a string")
    elif not (source := source.strip()):
        raise ValueError("mglob() argument must be a non-empty string")

    if re.fullmatch(r"(?!\d)\w+(\.(?!\d)\w+)*", source):
        return [source]

    prefix = re.match(r"(?:(?!\d)\w+(?:\.|$))*", source).group().rstrip(".")
    if not prefix:
        raise ValueError("mglob() pattern must start with a concrete package segment")

    try:
        package = importlib.import_module(prefix)
    except ImportError:
        return []

    pattern = _pattern(source)
    found = {prefix} if pattern.fullmatch(prefix) else set()
    for module in pkgutil.walk_packages(getattr(package, "__path__", []), prefix + "."):
        if pattern.fullmatch(module.name):
            found.add(module.name)
    return sorted(found)


Unset = UnsetType()
"""
Internal sentinel for “not provided” (see UnsetType).
"""


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "pluralize",
    "mglob",
    "UnsetType",
    "Unset",
)
