"""
Overture help rendering (rich-based, color-aware).

What this module provides
- usage(name, overload): syntax line, e.g. "set <variable> <value...>".
- summary(registry): one block per visible command (sorted), at most the
  first three overloads each, as "usage | help".
- details(name, command): heading, aliases, then every overload with its
  parameters ("--name: descr (optional)") and flags ("-name: descr").
- helpcommand(registry, console): a ready-made `help` command with two
  overloads: summary without arguments, details for one command.

Palette keys
- program-name, usage-section, help-text, heading, section-label,
  param-name, flag-name, optional-mark, aliases-label, empty

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- colorful=False renders plain text.
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.text import Text

from .arguments import Param
from .commands import Command, Overload
from .utils import pluralize

SUMMARY_OVERLOADS = 3


def _palette(colorful):
    styles = defaultdict(str, {
        "program-name": "bold #FF4D94",
        "usage-section": "bold #36C5F0",
        "help-text": "#9CA3AF",
        "heading": "bold underline #FFFFFF",
        "section-label": "underline #FFFFFF",
        "param-name": "bold #FFD600",
        "flag-name": "bold #22C55E",
        "optional-mark": "bold #F97316",
        "aliases-label": "bold #00E6FF",
        "empty": "italic #737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        return Text(str(fragment), styles[style] if colorful else "")

    return text


def usage(name, overload, /, *, colorful=False):
    """
    Build the syntax line of one overload.

    - required parameter:  <name>
    - optional parameter:  [name]
    - variadic parameter:  suffix "..." inside the brackets
    """
    text = _palette(colorful)
    parts = [text(name, "program-name")]
    for param in overload.params:
        label = param.name + ("..." if param.variadic else "")
        parts.append(text("[%s]" % label if param.optional else "<%s>" % label, "usage-section"))
    return Text(" ").join(parts)


def _line(name, overload, text, colorful):
    return Text.assemble(usage(name, overload, colorful=colorful), text(" | ", "usage-section"), text(overload.help, "help-text"))


def summary(registry, /, *, colorful=False):
    """
    Render every non-hidden command of `registry`, sorted by name.
    """
    text = _palette(colorful)
    lines = []
    for name, command in registry.visible():
        for overload in command.overloads[:SUMMARY_OVERLOADS]:
            lines.append(_line(name, overload, text, colorful))
    return Group(*lines)


def details(name, command, /, *, colorful=False):
    """
    Render the detailed help of one command (hidden commands included).
    """
    text = _palette(colorful)
    renders = [text("HELP FOR: %s" % name, "heading")]

    if command.aliases:
        label = pluralize("Alias") if len(command.aliases) > 1 else "Alias"
        renders.append(Text.assemble(text(label + ": ", "aliases-label"), ", ".join(command.aliases)))

    for overload in command.overloads:
        renders.append(Text(""))
        renders.append(_line(name, overload, text, colorful))

        renders.append(text("Parameters", "section-label"))
        for param in overload.params:
            line = Text.assemble(text("--" + param.name, "param-name"), ": ", param.descr or "")
            if param.optional:
                line.append_text(text(" (OPTIONAL)", "optional-mark"))
            renders.append(line)
        if not overload.params:
            renders.append(text("None.", "empty"))

        renders.append(text("Flags", "section-label"))
        for flag in overload.flags:
            renders.append(Text.assemble(text("-" + flag.name, "flag-name"), ": ", flag.descr or ""))
        if not overload.flags:
            renders.append(text("None.", "empty"))

    return Group(*renders)


def helpcommand(registry, console=None, /, *, name="help", colorful=True):
    """
    Build a `help` command bound to `registry`.

    Overloads (tried in order)
    1. no parameters        → summary of every visible command.
    2. <command>            → detailed help for one command (name or alias);
                              unknown names raise UnknownCommandError.

    The command is returned, not registered.
    """
    console = console or Console()

    def _summary(params, flags):
        console.print(summary(registry, colorful=colorful))

    def _details(params, flags):
        target = params["command"]
        command = registry.lookup(target)
        console.print(details(target, command, colorful=colorful))

    return Command(
        name,
        Overload("Displays this help menu.", executor=_summary),
        Overload(
            "Displays detailed help information for the specified command.",
            [Param("command", "The name of the command to get detailed help for.")],
            executor=_details,
        ),
    )


__all__ = (
    "usage",
    "summary",
    "details",
    "helpcommand",
)
