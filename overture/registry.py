"""
Overture registry: canonical-name and alias tables for commands.

Behavior
- register(name, command): store under `name`, and under every alias the
  command declares in the separate alias table. Last registration wins on
  any collision; nothing is rejected.
- lookup(name): name table first, then alias table, else UnknownCommandError
  (with close-match suggestions in the hint).
- include(pattern): import every module matching a module glob and register
  each module-level Command under its canonical name.

Lifetime
- A Registry is an explicit object created once at startup and handed to
  whoever processes lines (see overture.shell.Shell). Reads are side-effect
  free, so executors may look commands up while a dispatch is running.
- Both tables are guarded by one lock, so late registration from concurrent
  contexts is safe.
"""
import difflib
import importlib
import inspect
import logging
from threading import Lock

from .commands import Command
from .faults import FaultCode, UnknownCommandError, getdoc
from .tokens import tokenize
from .utils import mglob

logger = logging.getLogger(__name__)


class Registry:
    """
    Process-wide (but explicitly owned) command table.

    Example
        registry = Registry()
        registry.register("echo", echo)      # echo declares aliases=("say",)
        registry.lookup("say") is echo       # True
    """

    def __init__(self):
        self._commands = {}
        self._aliases = {}
        self._lock = Lock()

    def register(self, name, command, /):
        """
        Store `command` under `name` and under each of its aliases.

        Returns
        - the command, so the call can be used inline.
        """
        if not isinstance(name, str):
            raise TypeError("register() first argument must be a string")
        if not isinstance(command, Command):
            raise TypeError("register() second argument must be a command")

        with self._lock:
            if name in self._commands:
                logger.debug("command name %r re-registered, previous entry overwritten", name)
            self._commands[name] = command
            for alias in command.aliases:
                if alias in self._aliases:
                    logger.debug("command alias %r re-registered, previous entry shadowed", alias)
                self._aliases[alias] = command
        return command

    def lookup(self, name, /):
        """
        Return the command registered under `name` (or aliased as `name`).

        Raises
        - UnknownCommandError: carries `input` (the queried string) and
          `suggestions` (close matches among names and aliases).
        """
        with self._lock:
            try:
                return self._commands[name]
            except KeyError:
                pass
            try:
                return self._aliases[name]
            except KeyError:
                known = [*self._commands, *self._aliases]

        suggestions = difflib.get_close_matches(name, known, 5)
        try:
            hint = "did you mean %r? you can also run 'help' to see all commands" % suggestions[0]
        except IndexError:
            hint = "run 'help' to see all available commands"

        raise UnknownCommandError(
            "command %r does not exist" % name,
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            input=name,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND),
        )

    def include(self, source, /):
        """
        Discover and register module-level Command objects.

        Parameters
        - source: str
          Module glob (e.g. "app.commands.*"), expanded via mglob().

        Returns
        - list[Command]: the commands registered, in discovery order.

        Raises
        - TypeError: when source is not a string or a matched module cannot
          be imported.
        """
        if not isinstance(source, str):
            raise TypeError("include() argument must be a string")

        registered = []
        for module in mglob(source):
            try:
                module = importlib.import_module(module)
            except ImportError:
                raise TypeError(f"unable to import module {module!r}") from None
            for _, object in inspect.getmembers(module, lambda x: isinstance(x, Command)):
                registered.append(self.register(object.name, object))
                logger.debug("command %r included from %s", object.name, module.__name__)
        return registered

    def dispatch(self, text, /):
        """
        Tokenize `text`, look up token 0 and dispatch the command.

        Returns the executor result, or None for a blank line.
        """
        if not (tokens := tokenize(text)):
            return None
        return self.lookup(tokens[0]).dispatch(text, tokens)

    def names(self):
        """
        Sorted canonical names (aliases excluded).
        """
        with self._lock:
            return sorted(self._commands)

    def visible(self):
        """
        Sorted (name, command) pairs for summary listings; hidden commands are
        left out.
        """
        with self._lock:
            return sorted(
                ((name, command) for name, command in self._commands.items() if not command.hidden),
                key=lambda item: item[0],
            )

    def __contains__(self, name):
        with self._lock:
            return name in self._commands or name in self._aliases

    def __iter__(self):
        return iter(self.names())

    def __len__(self):
        with self._lock:
            return len(self._commands)

    def __repr__(self):
        return f"registry(commands={self.names()!r})"


__all__ = (
    "Registry",
)
