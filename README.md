# stepterm

A small toolkit for talking to a user through a terminal. A program writes
to one `UI` interface and gets output that suits where it runs. On an
interactive terminal that is a live view that redraws itself. Everywhere
else, such as a file, a pipe or a CI log, it is plain text written line by
line.

The package uses only the standard library.

## Choosing a UI

`stepterm.basic.console_ui()` checks standard output. When standard output
is a terminal with a usable size, it returns a `GlintUI`. In every other
case it returns a `NonInteractiveUI`.

There are three implementations of `stepterm.ui.UI`. You can construct any
of them directly, and each takes an optional writer (standard output by
default):

- `stepterm.glint.GlintUI` renders everything into a live-updating
  `Document`. Call `close()` when you are done, or use it as a context
  manager, so the final frame is drawn. It never takes input.
- `stepterm.noninteractive.NonInteractiveUI` writes plain lines. Error
  output starts with `! ` and warnings start with `warning: `. It never
  takes input.
- `stepterm.basic.BasicUI` writes coloured output, shows a spinner status,
  draws step groups on a live `Display` and reads input from standard input.

## Writing output

```python
from stepterm.basic import console_ui
from stepterm.ui import NamedValue, with_header_style, with_info_style

ui = console_ui()
ui.output("Server configuration:", with_header_style())
ui.named_values([
    NamedValue("DB Path", "data.db"),
    NamedValue("HTTP Address", "127.0.0.1:1235"),
])
ui.output("deployed %s instances", 3, with_info_style())
```

`output` formats its message with `%`-style arguments. Any options among
the arguments are taken out first and applied:

- style: `with_header_style()`, `with_info_style()`, `with_error_style()`,
  `with_warning_style()`, `with_success_style()`, `with_style(name)`. The
  style names are the values of the `Style` enum.
- destination: `with_writer(stream)`. `named_values` and `table` also
  accept it in `BasicUI` and `NonInteractiveUI`.

`named_values` right-aligns the names so that the colons line up. It skips
any entry whose value is an empty string. Booleans print as
`true`/`false`, and floats print with six decimals.
`stepterm.ui.format_named_values(rows)` returns the same text as a string.

Colours go through `stepterm.ui.colorize`. It adds escape codes only when
standard output is a terminal, `NO_COLOR` is unset and `TERM` is not
`dumb`.

## Tables

```python
from stepterm.table import Table, render_table

table = Table("Name", "State")
table.rich(["web", "running"], ["green"])
table.rich(["db", "failed"], ["red"])
ui.table(table)
print(render_table(table))
```

Tables are rendered without a border:

- Headers are upper-cased, with underscores and dots turned into spaces.
  A separator line follows them.
- Numeric cells are right-aligned and all other cells are left-aligned.
- The colours `green`, `yellow` and `red` wrap a cell in the matching
  escape code.

## Status

A `Status` is a single line that keeps updating:

```python
status = ui.status()
status.update("Building image...")
status.step("ok", "Image built")
status.close()
```

`Status` also works as a context manager that calls `close()`. Each UI has
its own version:

- `BasicUI` uses `stepterm.status.SpinnerStatus`. A spinner is drawn by a
  background thread, and the status is paused while `output` writes.
- `GlintUI` uses `GlintStatus`.
- `NonInteractiveUI` prints every update and step as its own line.

The status values are `"ok"`, `"error"`, `"warn"`, `"timeout"` and
`"abort"`. The icons are emoji when `LANG` contains `UTF-8` or
`WAYPOINT_FORCE_EMOJI` is set, and plain text otherwise (see
`choose_status_icons`).

## Step groups

A `StepGroup` follows several steps, which may run in parallel threads.
Each step has its own message and status. `term_output()` returns a
writer, which accepts bytes or text, and the output written to it is shown
under the step.

```python
group = ui.step_group()
step = group.add("Uploading %s", "artifact")
try:
    out = step.term_output()
    out.write(b"upload 100%\n")
    step.done()
finally:
    step.abort()  # does nothing if the step is already done
group.wait()
```

`wait()` blocks until every step is done or aborted. A step group also
works as a context manager that calls `wait()`. Steps added after `wait()`
still work, but nobody waits for them.

What a step's terminal output looks like depends on the UI:

- `BasicUI`: a 10×100 window drawn below the step line.
- `GlintUI`: a 10×80 window. An aborted step shows its full scrollback.
- `NonInteractiveUI`: the output is passed straight through with its ANSI
  escape sequences removed (`strip_ansi`, `StripAnsiWriter`).

## Input

```python
from stepterm.ui import Input

if ui.interactive():
    name = ui.input(Input("Name?"))
```

`GlintUI` and `NonInteractiveUI` always raise `NonInteractiveError`.

`BasicUI` prints the prompt and reads a line from standard input. When
`secret=True` and standard input is a terminal, it reads through
`getpass`. It raises `EOFError` when the input ends. If the `stop` event
passed to `BasicUI` is set while it is waiting, it raises
`InterruptedError`.

## Building blocks

The following modules can also be used on their own:

- `stepterm.vterm.Screen`: an in-memory character grid with scrollback.
  It handles text, newlines, tabs, cursor movement and erase sequences,
  and drops other escape sequences.
- `stepterm.display.Display`: redraws status lines in place.
- `stepterm.document.Document`: redraws `Component` objects, such as
  `Text`, in place.

## What it does not do

- stepterm has no command-line program; it is a library only.
- The terminal emulation in `Screen` covers only the sequences listed
  above. There are no colours, attributes or alternate screens inside step
  windows.
- `GlintUI` cannot prompt for input.