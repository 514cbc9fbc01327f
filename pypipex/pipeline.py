"""Running a pipeline of commands between an input and an output file."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping
from contextlib import ExitStack

from pypipex.commands import Command, Pipeline

COMMAND_NOT_FOUND = 127
CANNOT_EXECUTE = 126
_OUTFILE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC


class PipexError(Exception):
    """A failure that ends the whole run, carrying the exit status to use."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def error_message(
    command: Command, outfile_denied: str | None, is_last: bool
) -> None:
    """Report why ``command`` cannot run.

    ``outfile_denied`` is the reason the output file cannot be written, if
    any; it is reported only for the last command of the pipeline.
    """
    if command.args is None:
        print("pipex: Command not found")
    elif command.path is None:
        print("pipex: No such file or directory")
    if outfile_denied and is_last:
        print(f"pipex: {outfile_denied}", file=sys.stderr)


def check_files(infile: str, outfile: str) -> None:
    """Check that ``infile`` opens and create or truncate ``outfile``.

    An unreadable input file is only reported; an output file that cannot be
    created raises :class:`PipexError`.
    """
    try:
        os.close(os.open(infile, os.O_RDONLY))
    except OSError:
        print(f"pipex: {infile}")
    try:
        fd = os.open(outfile, _OUTFILE_FLAGS, 0o644)
    except OSError as exc:
        raise PipexError(f"{outfile}: {exc.strerror}", 1) from exc
    os.close(fd)


def outfile_denied(pipeline: Pipeline) -> str | None:
    """Return why an existing output file cannot be opened for writing.

    Returns ``None`` when the file opens, or when it does not exist yet.
    """
    try:
        fd = os.open(pipeline.outfile, os.O_WRONLY)
    except OSError as exc:
        if os.access(pipeline.outfile, os.F_OK):
            return exc.strerror
        return None
    os.close(fd)
    return None


def _report_infile(infile: str) -> None:
    try:
        os.close(os.open(infile, os.O_RDONLY))
    except OSError:
        print(f"pipex: Opening error with {infile}")


def _create_pipes(count: int) -> list[tuple[int, int]]:
    pipes: list[tuple[int, int]] = []
    try:
        for _ in range(count):
            pipes.append(os.pipe())
    except OSError as exc:
        _close_pipes(pipes)
        raise PipexError(f"pipe error: {exc.strerror}", 1) from exc
    return pipes


def _close_pipes(pipes: list[tuple[int, int]]) -> None:
    for read_end, write_end in pipes:
        os.close(read_end)
        os.close(write_end)


def _spawn(
    command: Command,
    stdin_fd: int | None,
    stdout_fd: int | None,
    env: Mapping[str, str] | None,
) -> subprocess.Popen | int:
    assert command.args is not None and command.path is not None
    try:
        return subprocess.Popen(
            list(command.args),
            executable=command.path,
            stdin=stdin_fd,
            stdout=stdout_fd,
            env=dict(env) if env is not None else None,
        )
    except OSError as exc:
        print(f"pipex: {exc.strerror}", file=sys.stderr)
        return CANNOT_EXECUTE


def _start_stage(
    index: int,
    pipeline: Pipeline,
    pipes: list[tuple[int, int]],
    env: Mapping[str, str] | None,
    denied: str | None,
) -> subprocess.Popen | int:
    command = pipeline[index]
    is_first = index == 0
    is_last = index == len(pipeline) - 1

    if (command.path is None and not is_last) or (denied and is_last):
        error_message(command, denied, is_last)
        return COMMAND_NOT_FOUND

    stdin_fd = None if is_first else pipes[index - 1][0]
    stdout_fd = None if is_last else pipes[index][1]

    with ExitStack() as stack:
        if is_first:
            try:
                stdin_fd = os.open(pipeline.infile, os.O_RDONLY)
            except OSError:
                return 1
            stack.callback(os.close, stdin_fd)
        if is_last:
            try:
                stdout_fd = os.open(pipeline.outfile, _OUTFILE_FLAGS, 0o664)
            except OSError as exc:
                if command.path is None:
                    error_message(command, None, True)
                    return COMMAND_NOT_FOUND
                print(f"pipex outfile: {exc.strerror}", file=sys.stderr)
                return 1
            stack.callback(os.close, stdout_fd)
            if command.path is None:
                error_message(command, None, True)
                return COMMAND_NOT_FOUND
        return _spawn(command, stdin_fd, stdout_fd, env)


def run_pipeline(
    pipeline: Pipeline, env: Mapping[str, str] | None = None
) -> list[int]:
    """Run every command of ``pipeline``, chained by pipes.

    The first command reads the input file and the last writes the output
    file. Returns the exit status of each stage in order: 127 for a command
    that was not found, 126 for one that could not be executed, 1 when its
    file could not be opened.
    """
    if not len(pipeline):
        return []
    _report_infile(pipeline.infile)
    denied = outfile_denied(pipeline)
    pipes = _create_pipes(len(pipeline) - 1)
    outcomes: list[subprocess.Popen | int] = []
    try:
        for index in range(len(pipeline)):
            outcomes.append(_start_stage(index, pipeline, pipes, env, denied))
    finally:
        _close_pipes(pipes)
    return [
        outcome if isinstance(outcome, int) else outcome.wait()
        for outcome in outcomes
    ]