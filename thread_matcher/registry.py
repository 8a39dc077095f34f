"""Command discovery for the thread-match CLI.

Every non-private module in thread_matcher/commands/ that defines a
module-level `command` (a Command) becomes a subcommand. Two modules
claiming the same command name is a packaging error and fails loudly.
"""

import importlib
import pkgutil

import thread_matcher.commands as commands_pkg
from thread_matcher.core.types import Command

_registry: dict[str, Command] = {}


def _command_modules() -> list[str]:
    found = pkgutil.iter_modules(commands_pkg.__path__)
    return sorted(name for _finder, name, _ispkg in found if not name.startswith('_'))


def discover() -> dict[str, Command]:
    """Import all command modules and return the registry."""
    if _registry:
        return _registry

    for modname in _command_modules():
        module = importlib.import_module(f'{commands_pkg.__name__}.{modname}')
        cmd = getattr(module, 'command', None)
        if not isinstance(cmd, Command):
            continue
        if cmd.name in _registry:
            raise RuntimeError(f'Command {cmd.name!r} defined twice (second in {module.__name__})')
        _registry[cmd.name] = cmd

    return _registry


def get(name: str) -> Command:
    """Get a command by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_commands() -> dict[str, Command]:
    """Return all registered commands."""
    return discover()
