"""Command parsing and executable lookup for a pipeline."""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

NO_ENVIRONMENT_MESSAGE = "pipex: error: no environment found"


@dataclass(frozen=True)
class Command:
    """One pipeline stage: its argument vector and resolved executable path.

    ``args`` is ``None`` when the command string held no words; ``path`` is
    ``None`` when no executable could be found for it.
    """

    args: tuple[str, ...] | None
    path: str | None = None

    @property
    def found(self) -> bool:
        """True when an executable was resolved for this command."""
        return self.path is not None


@dataclass
class Pipeline:
    """The commands to run in order, with the input and output files."""

    commands: list[Command] = field(default_factory=list)
    infile: str = ""
    outfile: str = ""

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __getitem__(self, index: int) -> Command:
        return self.commands[index]


def get_env_path(env: Mapping[str, str] | None) -> str | None:
    """Return the PATH value from ``env``, or ``None`` if it has none.

    An empty or missing environment is reported on standard output.
    """
    if not env:
        print(NO_ENVIRONMENT_MESSAGE)
        return None
    return env.get("PATH")


def join_command(directory: str, cmd: str) -> str:
    """Join a search directory and a command name with a single slash."""
    return f"{directory}/{cmd}"


def _is_executable(path: str) -> bool:
    return os.access(path, os.F_OK) and os.access(path, os.X_OK)


def find_path(env_path: str | None, cmd: str | None) -> str | None:
    """Search the colon-separated ``env_path`` for an executable ``cmd``.

    Empty entries in the search path are ignored. Returns the first
    candidate that exists and is executable, or ``None``.
    """
    if not env_path or not cmd:
        return None
    for directory in filter(None, env_path.split(":")):
        candidate = join_command(directory, cmd)
        if _is_executable(candidate):
            return candidate
    return None


def _split_words(cmd_str: str) -> tuple[str, ...]:
    return tuple(word for word in cmd_str.split(" ") if word)


def parse_command(cmd_str: str, env: Mapping[str, str] | None) -> Command:
    """Split a command string on spaces and resolve its executable.

    Names starting with ``/`` or ``.`` are used as given when executable;
    other names are searched for along PATH.
    """
    words = _split_words(cmd_str)
    if not words:
        return Command(args=None, path=None)
    name = words[0]
    if name.startswith(("/", ".")):
        path = name if os.access(name, os.X_OK) else None
    else:
        path = find_path(get_env_path(env), name)
    return Command(args=words, path=path)


def get_commands(
    argv: Sequence[str], env: Mapping[str, str] | None
) -> Pipeline | None:
    """Build a pipeline from ``program infile cmd... outfile`` arguments.

    Returns ``None`` when the arguments hold no command.
    """
    commands = [parse_command(cmd_str, env) for cmd_str in argv[2:-1]]
    if not commands:
        return None
    return Pipeline(commands=commands, infile=argv[1], outfile=argv[-1])