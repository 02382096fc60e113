"""Verify exercises in order, prompting the learner where one is pending."""

from __future__ import annotations

from typing import Iterable

from .exercise import (
    CompilationFailed,
    CompiledExercise,
    Exercise,
    ExerciseOutput,
    Mode,
    RunFailed,
)
from .ui import Spinner, no_emoji, style, success, warn


class ExerciseFailed(Exception):
    """An exercise failed to compile, run, pass, or is still pending."""

    def __init__(self, exercise: Exercise):
        super().__init__(f"{exercise} failed")
        self.exercise = exercise


def verify(exercises: Iterable[Exercise], verbose: bool = False) -> None:
    """Check each exercise in turn; raise ExerciseFailed at the first failure."""
    for exercise in exercises:
        if exercise.mode is Mode.TEST:
            ok = _compile_and_test(exercise, interactive=True, verbose=verbose)
        elif exercise.mode is Mode.COMPILE:
            ok = _compile_and_run_interactively(exercise)
        else:
            ok = _compile_only(exercise)
        if not ok:
            raise ExerciseFailed(exercise)


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run an exercise's tests without prompting."""
    if not _compile_and_test(exercise, interactive=False, verbose=verbose):
        raise ExerciseFailed(exercise)


def _compile(exercise: Exercise, spinner: Spinner) -> CompiledExercise | None:
    try:
        return exercise.compile()
    except CompilationFailed as failure:
        spinner.finish_and_clear()
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(failure.output.stderr)
        return None


def _run_compiled(compiled: CompiledExercise) -> tuple[ExerciseOutput, bool]:
    try:
        return compiled.run(), True
    except RunFailed as failure:
        return failure.output, False


def _compile_only(exercise: Exercise) -> bool:
    spinner = Spinner(f"Compiling {exercise}...")
    compiled = _compile(exercise, spinner)
    if compiled is None:
        return False
    compiled.close()
    spinner.finish_and_clear()
    success(f"Successfully compiled {exercise}!")
    return prompt_for_completion(exercise)


def _compile_and_run_interactively(exercise: Exercise) -> bool:
    spinner = Spinner(f"Compiling {exercise}...")
    compiled = _compile(exercise, spinner)
    if compiled is None:
        return False
    with compiled:
        spinner.set_message(f"Running {exercise}...")
        output, ok = _run_compiled(compiled)
        spinner.finish_and_clear()
        if not ok:
            warn(f"Ran {exercise} with errors")
            print(output.stdout)
            print(output.stderr)
            return False
        success(f"Successfully ran {exercise}!")
        return prompt_for_completion(exercise, output.stdout)


def _compile_and_test(exercise: Exercise, interactive: bool, verbose: bool) -> bool:
    spinner = Spinner(f"Testing {exercise}...")
    compiled = _compile(exercise, spinner)
    if compiled is None:
        return False
    with compiled:
        output, ok = _run_compiled(compiled)
        spinner.finish_and_clear()
        if not ok:
            warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
            print(output.stdout)
            return False
        if verbose:
            print(output.stdout)
        success(f"Successfully tested {exercise}")
        return prompt_for_completion(exercise) if interactive else True


def _separator() -> str:
    return style("====================", bold=True)


def prompt_for_completion(exercise: Exercise, prompt_output: str | None = None) -> bool:
    """Return True if the exercise is done; otherwise show where the marker is."""
    state = exercise.state()
    if state.done:
        return True

    emoji_free = no_emoji()
    if exercise.mode is Mode.COMPILE:
        success_msg = "The code is compiling!"
    elif exercise.mode is Mode.TEST:
        success_msg = "The code is compiling, and the tests pass!"
    elif emoji_free:
        success_msg = "The code is compiling, and Clippy is happy!"
    else:
        success_msg = "The code is compiling, and 📎 Clippy 📎 is happy!"

    print()
    if emoji_free:
        print(f"~*~ {success_msg} ~*~")
    else:
        print(f"🎉 🎉  {success_msg} 🎉 🎉")
    print()

    if prompt_output is not None:
        print("Output:")
        print(_separator())
        print(prompt_output)
        print(_separator())
        print()

    print("You can keep working on this exercise,")
    print(
        "or jump into the next one by removing the "
        f"{style('`I AM NOT DONE`', bold=True)} comment:"
    )
    print()
    for context_line in state.context:
        line = style(context_line.line, bold=True) if context_line.important else context_line.line
        number = style(f"{context_line.number:>2}", "blue", bold=True)
        print(f"{number} {style('|', 'blue')}  {line}")

    return False