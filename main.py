from rich.pretty import pprint

from overture import *
from overture.helper import helpcommand

variables = {}


@overload("Outputs the provided text into the terminal.", [Param("text", "The text to echo.", variadic=True)])
def echo(params, flags):
    print(" ".join(params["text"]))


@overload("Sets a variable with the specified name and value.", [
    Param("variable", "The name of the variable to set.", parser=identifier),
    Param("value", "The value to assign to the variable.", variadic=True),
])
def assign(params, flags):
    variables[params["variable"]] = " ".join(params["value"])


@overload("Unsets the specified variable.", [Param("variable", "The name of the variable to unset.", parser=identifier)])
def unassign(params, flags):
    variables.pop(params["variable"], None)


@overload("Lists all currently defined variables.", flags=[Flag("l", "One variable per line.")])
def listing(params, flags):
    separator = "\n" if flags["l"] else ", "
    print(separator.join(f"{key} = {value}" for key, value in variables.items()) or "No variables are set.")


@overload("Test command.", [
    Param("ov", "optional variadic", optional=True, variadic=True),
    Param("p", "required positional"),
    Param("v", "required variadic", variadic=True),
    Param("op", "optional positional", optional=True),
], [
    Flag("v", "test flag 1"),
    Flag("x", "test flag 2"),
])
def probe(params, flags):
    pprint({name: value for name, value in params.items() if name not in (RAW, TOKENS)} | {"flags": dict(flags)})


if __name__ == '__main__':
    registry = Registry()
    shell = Shell(registry, lambda line: line.replace("$HOME", "/home/overture"))

    registry.register("echo", Command("echo", echo, aliases=("say",)))
    registry.register("set", Command("set", assign))
    registry.register("unset", Command("unset", unassign))
    registry.register("env", Command("env", listing))
    registry.register("test", Command("test", probe, hidden=True))
    registry.register("help", helpcommand(registry, shell.console))

    pprint(registry.lookup("test"))

    for line in (
        'say "hello   world" from $HOME',
        "set greeting hi there",
        "env -l",
        "unset 9lives",
        "test --p first a b c",
        "help",
        "help test",
        "nope",
    ):
        shell.console.rule(line)
        shell(line)
