"""Command auto-discovery and registration.

Scans palette_lut/commands/ for modules that define a `command` object
of type Command. Collects them into a dict keyed by name.

Handles both normal Python (pkgutil.iter_modules) and frozen PyInstaller
binaries (where iter_modules returns nothing; falls back to explicit
imports from commands/__init__.py).
"""

import importlib
import pkgutil

from palette_lut.core.types import Command

_registry: dict[str, Command] = {}

# Known command module names, fallback for frozen binaries
_COMMAND_MODULES = [
    'colormap',
    'expand',
    'table',
]


def register(cmd: Command) -> Command:
    """Add a command to the registry. Two commands may not share a name."""
    existing = _registry.get(cmd.name)
    if existing is not None and existing is not cmd:
        raise ValueError(f'Duplicate command name: {cmd.name}')
    _registry[cmd.name] = cmd
    return cmd


def discover() -> dict[str, Command]:
    """Import all command modules and return the registry."""
    if _registry:
        return _registry

    import palette_lut.commands as pkg

    found_modules = [
        modname for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__) if not modname.startswith('_')
    ]
    if not found_modules:
        found_modules = _COMMAND_MODULES

    for modname in found_modules:
        module = importlib.import_module(f'palette_lut.commands.{modname}')
        cmd = getattr(module, 'command', None)
        if isinstance(cmd, Command):
            register(cmd)

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
