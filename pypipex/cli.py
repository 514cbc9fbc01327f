"""Command-line entry points."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from pypipex.commands import get_commands
from pypipex.pipeline import PipexError, run_pipeline

USAGE = "Usage: ./pipex file1 cmd1 cmd2 file2"
PROGRAM = "pipex"


def _run(args: list[str]) -> int:
    env = dict(os.environ)
    pipeline = get_commands([PROGRAM, *args], env)
    if pipeline is not None:
        try:
            run_pipeline(pipeline, env)
        except PipexError as exc:
            print(str(exc), file=sys.stderr)
            return exc.exit_code
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``infile cmd1 cmd2 outfile``: exactly two commands."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 4:
        print(USAGE)
        return 1
    return _run(args)


def main_bonus(argv: Sequence[str] | None = None) -> int:
    """Run ``infile cmd1 cmd2 ... cmdN outfile``: two or more commands."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 4:
        print(USAGE)
        return 1
    return _run(args)