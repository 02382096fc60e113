"""Command-line interface: list, run, verify, watch and hint."""

from __future__ import annotations

import argparse
import itertools
import os
import queue
import subprocess
import sys
import threading
from pathlib import Path, PurePath
from typing import Iterable, Iterator, TextIO

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .exercise import Exercise, load_exercises
from .run import run
from .ui import no_emoji
from .verify import ExerciseFailed, verify

VERSION = "4.5.0"
DEBOUNCE_SECONDS = 2.0

_WELCOME = (
    "",
    "       welcome to...",
    "   ___ __  __ _ __ _   _ _ __  _ __   ___ _ __",
    "  / _ \\\\ \\/ /| '__| | | | '_ \\| '_ \\ / _ \\ '__|",
    " |  __/ >  < | |  | |_| | | | | | | |  __/ |",
    "  \\___|/_/\\_\\|_|   \\__,_|_| |_|_| |_|\\___|_|",
    "",
)

_FINISH = (
    "",
    "+----------------------------------------------------+",
    "|          You made it to the Fe-nish line!          |",
    "+--------------------------  ------------------------+",
    "                          \\/                         ",
    "",
    "We hope you enjoyed learning about the various aspects of Rust!",
    "If you noticed any issues, please don't hesitate to report them to our repo.",
    "You can also contribute your own exercises to help the greater community!",
    "",
    "Before reporting an issue or contributing, please read our guidelines.",
)


class ExerciseNotFound(LookupError):
    """No exercise matches the requested name."""


class _Parser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = _Parser(
        prog="exrunner",
        description="A collection of small exercises to get you used to writing "
        "and reading Rust code",
    )
    parser.add_argument(
        "--nocapture", action="store_true", help="show outputs from the test exercises"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="show the executable version"
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.add_parser(
        "verify", help="Verifies all exercises according to the recommended order"
    )
    commands.add_parser("watch", help="Reruns `verify` when files were edited")
    run_parser = commands.add_parser("run", help="Runs/Tests a single exercise")
    run_parser.add_argument("name", help="the name of the exercise")
    hint_parser = commands.add_parser("hint", help="Returns a hint for the given exercise")
    hint_parser.add_argument("name", help="the name of the exercise")
    list_parser = commands.add_parser("list", help="Lists the exercises available")
    list_parser.add_argument(
        "-p", "--paths", action="store_true", help="show only the paths of the exercises"
    )
    list_parser.add_argument(
        "-n", "--names", action="store_true", help="show only the names of the exercises"
    )
    list_parser.add_argument(
        "-f",
        "--filter",
        default=None,
        help="provide a string to match exercise names; comma separated patterns "
        "are acceptable",
    )
    list_parser.add_argument(
        "-u", "--unsolved", action="store_true", help="display only exercises not yet solved"
    )
    list_parser.add_argument(
        "-s", "--solved", action="store_true", help="display only exercises that have been solved"
    )
    return parser


def find_exercise(name: str, exercises: Iterable[Exercise]) -> Exercise:
    """Find an exercise by name; "next" means the first one still pending."""
    if name == "next":
        found = next((e for e in exercises if not e.looks_done()), None)
        if found is None:
            raise ExerciseNotFound(
                "🎉 Congratulations! You have done all the exercises!\n"
                "🔚 There are no more exercises to do next!"
            )
        return found
    found = next((e for e in exercises if e.name == name), None)
    if found is None:
        raise ExerciseNotFound(f"No exercise found for '{name}'!")
    return found


def list_exercises(
    exercises: Iterable[Exercise],
    paths: bool = False,
    names: bool = False,
    filter: str | None = None,
    unsolved: bool = False,
    solved: bool = False,
    out: TextIO | None = None,
) -> int:
    """Write the exercise list and a progress line; return the number done."""
    out = sys.stdout if out is None else out
    exercises = list(exercises)
    if not paths and not names:
        out.write(f"{'Name':<17}\t{'Path':<46}\t{'Status':<7}\n")
    patterns = [p for p in (filter or "").lower().split(",") if p.strip()]
    done_count = 0
    for exercise in exercises:
        fname = str(exercise.path)
        matches = any(p in exercise.name or p in fname for p in patterns)
        done = exercise.looks_done()
        if done:
            done_count += 1
        status = "Done" if done else "Pending"
        wanted = (done and solved) or (not done and unsolved) or (not solved and not unsolved)
        if wanted and (matches or filter is None):
            if paths:
                line = fname
            elif names:
                line = exercise.name
            else:
                line = f"{exercise.name:<17}\t{fname:<46}\t{status:<7}"
            out.write(line + "\n")
    if exercises:
        percentage = f"{done_count / len(exercises) * 100.0:.2f}"
    else:
        percentage = "NaN"
    out.write(
        f"Progress: You completed {done_count} / {len(exercises)} exercises "
        f"({percentage} %).\n"
    )
    return done_count


def rustc_exists() -> bool:
    """True when `rustc --version` runs successfully."""
    try:
        result = subprocess.run(
            ["rustc", "--version"], stdout=subprocess.DEVNULL, check=False
        )
    except OSError:
        return False
    return result.returncode == 0


def _clear_screen() -> None:
    print("\x1bc")


def _ends_with(path: Path, suffix) -> bool:
    tail = tuple(part for part in PurePath(suffix).parts if part != ".")
    if not tail:
        return False
    return path.parts[-len(tail):] == tail


class _SharedHint:
    """The hint of the most recently failed exercise, shared between threads."""

    def __init__(self, hint: str):
        self._lock = threading.Lock()
        self._hint = hint

    def get(self) -> str:
        with self._lock:
            return self._hint

    def set(self, hint: str) -> None:
        with self._lock:
            self._hint = hint


def _spawn_watch_shell(hint: _SharedHint) -> None:
    print(
        "Type 'hint' or open the corresponding README.md file to get help "
        "or type 'clear' to clear the screen."
    )

    def shell() -> None:
        while True:
            try:
                line = sys.stdin.readline()
            except (OSError, ValueError) as error:
                print(f"error reading command: {error}")
                continue
            if not line:
                return
            command = line.strip()
            if command == "hint":
                print(hint.get())
            elif command == "clear":
                print("\x1b[2J\x1b[1;1H")
            else:
                print(f"unknown command: {command}")

    threading.Thread(target=shell, daemon=True).start()


class _RustFileEvents(FileSystemEventHandler):
    """Queue the paths of created or modified .rs files."""

    def __init__(self, changes: queue.Queue):
        super().__init__()
        self._changes = changes

    def on_created(self, event) -> None:
        self._record(event)

    def on_modified(self, event) -> None:
        self._record(event)

    def _record(self, event) -> None:
        if event.is_directory:
            return
        path = Path(os.fsdecode(event.src_path))
        if path.suffix == ".rs":
            self._changes.put(path)


def _debounced(changes: queue.Queue) -> list[Path]:
    paths = [changes.get()]
    while True:
        try:
            path = changes.get(timeout=DEBOUNCE_SECONDS)
        except queue.Empty:
            return paths
        if path not in paths:
            paths.append(path)


def _pending_after(filepath: Path, exercises: list[Exercise]) -> Iterator[Exercise]:
    return itertools.chain(
        itertools.dropwhile(lambda e: not _ends_with(filepath, e.path), exercises),
        (e for e in exercises if not e.looks_done() and not _ends_with(filepath, e.path)),
    )


def watch(exercises: Iterable[Exercise], verbose: bool = False) -> None:
    """Verify, then re-verify whenever an exercise file changes, until all pass."""
    exercises = list(exercises)
    changes: queue.Queue = queue.Queue()
    observer = Observer()
    observer.schedule(_RustFileEvents(changes), "./exercises", recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, verbose)
            return
        except ExerciseFailed as failure:
            hint = _SharedHint(failure.exercise.hint)
        _spawn_watch_shell(hint)
        while True:
            for path in _debounced(changes):
                if not path.exists():
                    continue
                filepath = path.resolve()
                _clear_screen()
                try:
                    verify(_pending_after(filepath, exercises), verbose)
                    return
                except ExerciseFailed as failure:
                    hint.set(failure.exercise.hint)
    finally:
        observer.stop()
        observer.join()


def main(argv=None) -> int:
    """Run the command line; return the exit status."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"v{VERSION}")
        return 0

    if args.command is None:
        print("\n".join(_WELCOME))

    if not Path("info.toml").exists():
        print(f"{sys.argv[0]} must be run from the exercises directory")
        print("Try `cd` into the directory that holds info.toml!")
        return 1

    if not rustc_exists():
        print("We cannot find `rustc`.")
        print("Try running `rustc --version` to diagnose your problem.")
        print("For instructions on how to install Rust, check the README.")
        return 1

    exercises = load_exercises("info.toml")
    verbose = args.nocapture

    if args.command is None:
        print(Path("default_out.txt").read_text(encoding="utf-8"))
        return 0

    if args.command == "list":
        try:
            list_exercises(
                exercises,
                paths=args.paths,
                names=args.names,
                filter=args.filter,
                unsolved=args.unsolved,
                solved=args.solved,
            )
        except BrokenPipeError:
            return 0
        except OSError:
            return 1
        return 0

    if args.command in ("run", "hint"):
        try:
            exercise = find_exercise(args.name, exercises)
        except ExerciseNotFound as missing:
            print(missing)
            return 1
        if args.command == "hint":
            print(exercise.hint)
            return 0
        try:
            run(exercise, verbose)
        except ExerciseFailed:
            return 1
        return 0

    if args.command == "verify":
        try:
            verify(exercises, verbose)
        except ExerciseFailed:
            return 1
        return 0

    try:
        watch(exercises, verbose)
    except OSError as error:
        print(f"Error: Could not watch your progress. Error message was {error!r}.")
        print(
            "Most likely you've run out of disk space or your 'inotify limit' "
            "has been reached."
        )
        return 1
    emoji = "★" if no_emoji() else "🎉"
    print(f"{emoji} All exercises completed! {emoji}")
    print("\n".join(_FINISH))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())