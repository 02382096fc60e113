# exrunner

`exrunner` drives a course of small exercises. Each exercise is a single
source file that you fix until it compiles, passes its tests or satisfies
the linter. `exrunner` compiles and runs the exercises for you, shows the
compiler output when something goes wrong, and moves you on to the next
exercise once you mark it as finished.

## Requirements

- Python 3.11 or later
- `rustc` on your `PATH` (and `cargo` for lint exercises)

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## The course directory

Run `exrunner` from the directory that holds the course. That directory
must contain an `info.toml` file listing the exercises in their
recommended order:

```toml
[[exercises]]
name = "variables1"
path = "exercises/variables/variables1.rs"
mode = "compile"
hint = "Declare the variable with `let`."
```

Every entry needs `name`, `path`, `mode` and `hint`. `mode` is one of:

- `compile`: the file is built as a program and run,
- `test`: the file is built as a test harness and its tests are run,
- `clippy`: the file is built and then linted with `cargo clippy`, with
  warnings treated as errors. The manifest is written to
  `exercises/clippy/Cargo.toml`.

If `info.toml` is missing, or `rustc --version` cannot be run, `exrunner`
stops with exit status 1. Compiled programs are written to a temporary
file in the current directory and removed afterwards.

### Marking an exercise as finished

An exercise counts as pending while it holds a comment line reading
`// I AM NOT DONE`, even when it already compiles. When a pending exercise
builds and passes, `exrunner` shows the lines around that comment. Delete
the line to move on to the next exercise.

## Commands

Running `exrunner` with no subcommand prints a welcome banner followed by
the contents of `default_out.txt` from the course directory.

```
exrunner --version
```
Prints the version.

```
exrunner verify
```
Goes through the exercises in order and stops at the first one that does
not build, fails its tests, or still carries the `I AM NOT DONE` marker.
Exits with status 1 if any exercise is not finished.

```
exrunner watch
```
Does what `verify` does, then watches the `exercises` directory and checks
again whenever a `.rs` file is created or changed, starting from the
changed exercise. While it runs, type `hint` to see the hint for the
exercise that failed last, or `clear` to clear the screen. It ends once
every exercise passes.

```
exrunner run variables1
exrunner run next
```
Builds and runs one exercise, or the first pending one when the name is
`next`, without prompting about the marker. Exits with status 1 on
failure or when no exercise has that name.

```
exrunner hint variables1
```
Prints the hint for one exercise.

```
exrunner list
exrunner list --paths
exrunner list --names
exrunner list --filter vars,func
exrunner list --solved
exrunner list --unsolved
```
Lists the exercises with their status, then a progress line.
`--filter` takes comma-separated patterns, matched case-sensitively
after being lower-cased, against names and paths.

Add `--nocapture` before a subcommand to see the output of test exercises:

```
exrunner --nocapture run tests1
```

Set the `NO_EMOJI` environment variable to replace emoji in messages with
plain characters. A usage error exits with status 1.

## Using it from Python

The command line is built on a few modules that can be used directly:

- `exrunner.exercise`: `Exercise`, `Mode`, `load_exercises` and
  `parse_exercises` for reading `info.toml`; `Exercise.compile()`,
  `Exercise.state()` and `Exercise.looks_done()`.
- `exrunner.verify`: `verify()` and `test()`, which raise `ExerciseFailed`.
- `exrunner.run`: `run()` for a single exercise.
- `exrunner.cli`: `main()`, `find_exercise()` and `list_exercises()`.

## Reference solutions

The `exrunner.lessons` package holds worked solutions to course topics as
plain Python functions and classes, in these modules: `quizzes`,
`collections_basics`, `error_handling`, `iterators`, `concurrency`,
`control` and `basics`.

```python
from exrunner.lessons.quizzes import calculate_apple_price
from exrunner.lessons.iterators import capitalize_first

calculate_apple_price(65)   # 65
capitalize_first("hello")   # "Hello"
```

## What it does not do

The reference solutions cover only the topics listed above; there are
none here for type conversions, structs and enums, or ownership and
options. `exrunner` ships no exercises or `info.toml` of its own: it
works on a course directory you provide.