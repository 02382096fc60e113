"""Exercises: their description, compilation, running and completion state."""

from __future__ import annotations

import enum
import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from pathlib import Path

RUSTC_COLOR_ARGS = ("--color", "always")
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/clippy/Cargo.toml"

_NOT_DONE = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)


def temp_file() -> str:
    """Return a temporary binary name unique to this process and thread."""
    thread_id = "".join(ch for ch in str(threading.get_ident()) if ch.isalnum())
    return f"./temp_{os.getpid()}_{thread_id}"


def clean() -> None:
    """Remove the temporary binary, ignoring a missing file."""
    try:
        os.remove(temp_file())
    except OSError:
        pass


class Mode(enum.Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """A source line shown around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class State:
    """Completion state: done when there is no pending context."""

    context: tuple[ContextLine, ...] = ()

    @property
    def done(self) -> bool:
        return not self.context


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured output of a finished command."""

    stdout: str
    stderr: str


class CompilationFailed(Exception):
    """The exercise did not compile."""

    def __init__(self, output: ExerciseOutput):
        super().__init__("compilation failed")
        self.output = output


class RunFailed(Exception):
    """The compiled exercise exited unsuccessfully."""

    def __init__(self, output: ExerciseOutput):
        super().__init__("run failed")
        self.output = output


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _execute(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(list(args), capture_output=True, check=False)


def _output_of(result: subprocess.CompletedProcess) -> ExerciseOutput:
    return ExerciseOutput(stdout=_decode(result.stdout), stderr=_decode(result.stderr))


def _lines(source: str) -> list[str]:
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


class CompiledExercise:
    """A successfully compiled exercise; closing it removes the binary."""

    def __init__(self, exercise: "Exercise"):
        self.exercise = exercise
        self._closed = False

    def run(self) -> ExerciseOutput:
        """Run the binary; raise RunFailed when it fails."""
        return self.exercise._run()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            clean()

    def __enter__(self) -> "CompiledExercise":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


@dataclass
class Exercise:
    """An exercise as listed in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.mode = Mode(self.mode)

    def compile(self) -> CompiledExercise:
        """Compile the exercise; raise CompilationFailed on failure."""
        source = str(self.path)
        target = temp_file()
        if self.mode is Mode.COMPILE:
            result = _execute("rustc", source, "-o", target, *RUSTC_COLOR_ARGS)
        elif self.mode is Mode.TEST:
            result = _execute("rustc", "--test", source, "-o", target, *RUSTC_COLOR_ARGS)
        else:
            result = self._clippy(source, target)
        if result.returncode == 0:
            return CompiledExercise(self)
        clean()
        raise CompilationFailed(_output_of(result))

    def _clippy(self, source: str, target: str) -> subprocess.CompletedProcess:
        cargo_toml = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2018"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(cargo_toml, encoding="utf-8")
        except OSError as err:
            message = (
                "Failed to write Clippy Cargo.toml file."
                if "NO_EMOJI" in os.environ
                else "Failed to write 📎 Clippy 📎 Cargo.toml file."
            )
            raise RuntimeError(message) from err
        # Build a binary as well so the exercise can be run afterwards.
        _execute("rustc", source, "-o", target, *RUSTC_COLOR_ARGS)
        # A clean is required for clippy to report every lint.
        _execute("cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH, *RUSTC_COLOR_ARGS)
        return _execute(
            "cargo", "clippy", "--manifest-path", CLIPPY_CARGO_TOML_PATH,
            *RUSTC_COLOR_ARGS, "--", "-D", "warnings",
        )

    def _run(self) -> ExerciseOutput:
        arg = "--show-output" if self.mode is Mode.TEST else ""
        result = _execute(temp_file(), arg)
        output = _output_of(result)
        if result.returncode != 0:
            raise RunFailed(output)
        return output

    def state(self) -> State:
        """Read the source and report whether the pending marker remains."""
        source = self.path.read_text(encoding="utf-8")
        if not _NOT_DONE.search(source):
            return State()
        lines = _lines(source)
        matched = next((i for i, line in enumerate(lines) if _NOT_DONE.search(line)), None)
        if matched is None:
            raise RuntimeError("pending marker found but no line holds it")
        low = max(matched - CONTEXT, 0)
        high = matched + CONTEXT
        return State(tuple(
            ContextLine(line=line, number=i + 1, important=i == matched)
            for i, line in enumerate(lines[low:high + 1], start=low)
        ))

    def looks_done(self) -> bool:
        """True when the pending marker has been removed."""
        return self.state().done

    def __str__(self) -> str:
        return str(self.path)


def parse_exercises(text: str) -> list[Exercise]:
    """Parse the exercise list from info.toml text."""
    data = tomllib.loads(text)
    try:
        entries = data["exercises"]
    except KeyError:
        raise ValueError("missing field `exercises`") from None
    exercises = []
    for entry in entries:
        missing = [key for key in ("name", "path", "mode", "hint") if key not in entry]
        if missing:
            raise ValueError(f"missing field `{missing[0]}`")
        exercises.append(Exercise(
            name=entry["name"], path=Path(entry["path"]),
            mode=Mode(entry["mode"]), hint=entry["hint"],
        ))
    return exercises


def load_exercises(path) -> list[Exercise]:
    """Read and parse an info.toml file."""
    return parse_exercises(Path(path).read_text(encoding="utf-8"))