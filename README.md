# pypipex

`pypipex` runs a chain of commands the way a shell pipeline with redirections
does. This command:

```
pypipex infile "grep foo" "wc -l" outfile
```

does the same work as:

```
< infile grep foo | wc -l > outfile
```

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Usage

### Two commands

```
pypipex file1 cmd1 cmd2 file2
```

- `file1` is opened for reading and becomes the standard input of `cmd1`.
- The output of `cmd1` becomes the input of `cmd2`.
- `file2` is created or truncated (mode 0664 before the umask), and receives
  the output of `cmd2`.

Give exactly four arguments. Any other number prints
`Usage: ./pipex file1 cmd1 cmd2 file2` and exits with status 1.

### Any number of commands

```
pypipex-bonus file1 cmd1 cmd2 cmd3 ... cmdN file2
```

This accepts four or more arguments. Every argument between the two files is
a command, and each command reads the output of the one before it.

### Resolving commands

Each command string is split on spaces, and empty words are dropped. The
first word is the program:

- If it starts with `/` or `.`, it is used as it stands, provided that it is
  executable.
- Otherwise each non-empty directory in `PATH` is searched in turn. The first
  match that exists and is executable is used. If the environment is empty,
  `pipex: error: no environment found` is printed and nothing is found.

### Errors

- If the input file cannot be opened, `pipex: Opening error with <file>` is
  printed and the first command does not run. The remaining commands still
  run.
- If a command cannot be resolved, `pipex: No such file or directory` is
  printed and that stage does not run. An empty command prints
  `pipex: Command not found`.
- If the output file exists but cannot be opened for writing, the last
  command is skipped and the reason is printed on standard error.
- If the output file cannot be created, `pipex outfile: <reason>` is printed
  on standard error and the last command does not run.

Both commands exit with status 0 once the arguments are accepted, whatever
the commands themselves return.

## Using it from Python

```python
import os

from pypipex.commands import get_commands
from pypipex.pipeline import run_pipeline

pipeline = get_commands(["pypipex", "in.txt", "cat", "wc -l", "out.txt"], os.environ)
if pipeline is not None:
    statuses = run_pipeline(pipeline, os.environ)
```

`pypipex.commands`:

- `get_commands(argv, env)` takes `program infile cmd... outfile` and returns
  a `Pipeline`, or `None` if no command was given.
- `Pipeline` holds `commands`, `infile` and `outfile`; it supports `len()`,
  iteration and indexing.
- `Command` holds `args` (a tuple of words, or `None` for an empty command)
  and `path` (the resolved executable, or `None`); `found` tells whether a
  path was resolved.
- `parse_command(cmd_str, env)`, `find_path(env_path, cmd)`,
  `get_env_path(env)` and `join_command(directory, cmd)` are the lookup steps.

`pypipex.pipeline`:

- `run_pipeline(pipeline, env)` runs every stage, waits for them, and returns
  one exit status per stage: the process's own status, 127 for a stage that
  was not run because its command was missing or the output file was denied,
  126 when the program could not be executed, and 1 when the stage's file
  could not be opened.
- `outfile_denied(pipeline)` returns the reason an existing output file cannot
  be opened for writing, or `None`.
- `check_files(infile, outfile)` reports an unreadable input file and creates
  or truncates the output file, raising `PipexError` (with `exit_code`) if it
  cannot.
- `error_message(command, outfile_denied, is_last)` prints why a command
  cannot run.

`pypipex.cli` has `main(argv)` and `main_bonus(argv)`, the two command-line
entry points. Each returns an exit status.

## What it does not do

Command strings are not parsed as a shell would: there is no quoting,
escaping, globbing, variable expansion or here-document input. The exit
status of the pipeline's commands is not passed on as the program's own.