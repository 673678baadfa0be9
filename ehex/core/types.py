"""Shared types for ehex-tool: Command and Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ehex.core.image import EhexImage


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='info', help='Print header and histogram')

        @command.run
        def run(image, report, args):
            ...

    With loads=True the CLI opens <path> before calling run and passes the
    image in; otherwise image is None and the command creates its own.
    legacy=True lets the command read v1 files regardless of config.
    """

    def __init__(self, name: str, help: str = '', loads: bool = True, legacy: bool = False):
        self.name = name
        self.help = help
        self.loads = loads
        self.legacy = legacy
        self.doc = ''  # module docstring, filled in by the registry
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, image: EhexImage | None, report: Report, args: Any) -> None:
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(image, report, args)


@dataclass
class Report:
    """Accumulates what commands did, for text/JSON output."""

    path: str = ''
    format: str | None = None
    magic: str | None = None
    version: int | None = None
    width: int = 0
    height: int = 0
    channels: int | None = None
    sections: dict[str, dict[str, Any]] = field(default_factory=dict)

    def describe(self, image: EhexImage, path: str | None = None) -> None:
        """Copy the image's header fields into the report."""
        meta = image.metadata
        if path is not None:
            self.path = path
        self.format = image.format
        self.magic = meta.magic
        self.version = meta.version
        self.width = meta.width
        self.height = meta.height
        self.channels = meta.channels

    def add(self, command_name: str, data: dict[str, Any]) -> None:
        self.sections.setdefault(command_name, {}).update(data)
