"""Command auto-discovery and registration.

Scans ehex/commands/ for modules that define a `command` object of type
Command. Collects them into a dict keyed by command name and attaches each
module's docstring as the command's long help.

Handles both normal Python (pkgutil.iter_modules) and frozen PyInstaller
binaries (where iter_modules returns nothing — falls back to the explicit
module list below).
"""

import importlib
import pkgutil

from ehex.core.types import Command

_registry: dict[str, Command] = {}

# Known command module names — fallback for frozen binaries
_COMMAND_MODULES = [
    'convert',
    'export',
    'import_',
    'info',
    'new',
    'paint',
    'resize',
    'sample',
    'view',
]


def discover() -> dict[str, Command]:
    """Import all command modules and return the registry."""
    if _registry:
        return _registry

    import ehex.commands as pkg

    found_modules = [
        modname for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__) if not modname.startswith('_')
    ]

    # Frozen binary fallback: pkgutil finds nothing, use known list
    if not found_modules:
        found_modules = _COMMAND_MODULES

    for modname in found_modules:
        module = importlib.import_module(f'ehex.commands.{modname}')
        cmd = getattr(module, 'command', None)
        if isinstance(cmd, Command):
            cmd.doc = (module.__doc__ or '').strip()
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
