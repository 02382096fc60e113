"""Run a single exercise without prompting."""

from __future__ import annotations

from .exercise import CompilationFailed, Exercise, Mode, RunFailed
from .ui import Spinner, success, warn
from .verify import ExerciseFailed
from .verify import test as test_exercise


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run (or test) one exercise; raise ExerciseFailed on failure."""
    if exercise.mode is Mode.TEST:
        test_exercise(exercise, verbose)
    else:
        _compile_and_run(exercise)


def _compile_and_run(exercise: Exercise) -> None:
    spinner = Spinner(f"Compiling {exercise}...")
    try:
        compiled = exercise.compile()
    except CompilationFailed as failure:
        spinner.finish_and_clear()
        warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        print(failure.output.stderr)
        raise ExerciseFailed(exercise) from failure

    with compiled:
        spinner.set_message(f"Running {exercise}...")
        try:
            output = compiled.run()
        except RunFailed as failure:
            spinner.finish_and_clear()
            print(failure.output.stdout)
            print(failure.output.stderr)
            warn(f"Ran {exercise} with errors")
            raise ExerciseFailed(exercise) from failure
        spinner.finish_and_clear()

    print(output.stdout)
    success(f"Successfully ran {exercise}")