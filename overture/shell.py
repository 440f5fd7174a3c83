"""
Overture shell: the line-processing loop body around a Registry.

Flow for one line
1. substitute(line) when a substitution callable was given (variables,
   embedded expressions; owned by the host).
2. tokenize; a blank line does nothing.
3. registry.lookup(token 0) → UnknownCommandError on miss.
4. command.resolve(text, tokens) → NoMatchingOverloadError when every
   overload rejects.
5. binding.execute() → the executor's result.

Fault presentation
- shell=True: faults are printed through trigger() (rich, stderr) and the
  line evaluates to None. Executor exceptions are wrapped as
  DelegatedCommandError for display.
- shell=False: faults are raised; executor exceptions propagate unmodified.
"""
import logging

from rich.console import Console

from .faults import *
from .tokens import tokenize
from .utils import Unset

logger = logging.getLogger(__name__)


class Shell:
    """
    Executes submitted lines against a registry.

    Parameters
    - registry: Registry
    - substitute: Callable[[str], str] | Unset
      Applied to each line before tokenizing.
    - prog: str
      Label used in fault headers (overridden by __prog__ in __main__).
    - shell, fancy, colorful: bool
      Fault presentation options (see module docstring).
    - console: rich Console for regular output; faults always go to stderr.
    """

    def __init__(
            self,
            registry,
            /,
            substitute=Unset,
            *,
            prog="overture",
            shell=True,
            fancy=False,
            colorful=True,
            console=None,
    ):
        if substitute is not Unset and not callable(substitute):
            raise TypeError("shell 'substitute' must be callable")
        self.registry = registry
        self.substitute = substitute
        self.prog = prog
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.console = console or Console()

    def trigger(self, fault, /, **options):
        """
        Surface `fault` with this shell's presentation options.
        """
        logger.debug("fault raised while executing a line: %s", fault.message)
        trigger(fault, prog=self.prog, shell=self.shell, fancy=self.fancy, colorful=self.colorful, **options)

    def execute(self, line, /):
        """
        Run one line. Returns the executor result, or None for blank lines
        and for faults handled in shell mode.
        """
        text = line if self.substitute is Unset else self.substitute(line)

        if not (tokens := tokenize(text)):
            return None

        try:
            binding = self.registry.lookup(tokens[0]).resolve(text, tokens)
        except CommandException as fault:
            return self.trigger(fault)

        try:
            return binding.execute()
        except Exception as exception:
            if not self.shell:
                raise
            if isinstance(exception, CommandException):
                return self.trigger(exception)
            logger.debug("command %r failed", tokens[0], exc_info=True)
            return self.trigger(DelegatedCommandError(
                "command %r failed: %s" % (tokens[0], exception),
                title="command failed",
                code=FaultCode.DELEGATED_ERROR,
                hint="check the command arguments or try 'help %s'" % tokens[0],
                docs=getdoc(FaultCode.DELEGATED_ERROR),
                exception=exception,
            ))

    def __call__(self, line, /):
        return self.execute(line)


__all__ = (
    "Shell",
)
