import io
import subprocess
from unittest import mock

import pytest

from exrunner.cli import (
    ExerciseNotFound,
    build_parser,
    find_exercise,
    list_exercises,
    main,
    rustc_exists,
    watch,
)
from exrunner.exercise import load_exercises

COMP_SUCCESS = "fn main() {\n}\n"
TEST_SUCCESS = (
    "#[test]\nfn passing() {\n    println!(\"THIS TEST TOO SHALL PASS\");\n"
    "    assert!(true);\n}\n"
)
COMP_FAILURE = "fn main() {\n    let\n}\n"
TEST_FAILURE = "#[test]\nfn passing() {\n    asset!(true);\n}\n"
TEST_NOT_PASSED = "#[test]\nfn not_passing() {\n    assert!(false);\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"
PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
PENDING_TEST = "// I AM NOT DONE\n\n#[test]\nfn it_works() {}\n"


def _write_fixture(root, entries, files):
    for name, text in files.items():
        (root / name).write_text(text, encoding="utf-8")
    blocks = [
        f'[[exercises]]\nname = "{name}"\npath = "{path}"\nmode = "{mode}"\nhint = "{hint}"\n'
        for name, path, mode, hint in entries
    ]
    (root / "info.toml").write_text("\n".join(blocks), encoding="utf-8")
    (root / "exercises").mkdir()


@pytest.fixture
def success_dir(tmp_path, monkeypatch):
    _write_fixture(
        tmp_path,
        [
            ("compSuccess", "compSuccess.rs", "compile", ""),
            ("testSuccess", "testSuccess.rs", "test", ""),
        ],
        {"compSuccess.rs": COMP_SUCCESS, "testSuccess.rs": TEST_SUCCESS},
    )
    (tmp_path / "default_out.txt").write_text("Thanks for installing!", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def failure_dir(tmp_path, monkeypatch):
    _write_fixture(
        tmp_path,
        [
            ("compFailure", "compFailure.rs", "compile", ""),
            ("testFailure", "testFailure.rs", "test", "Hello!"),
            ("testNotPassed", "testNotPassed.rs", "test", ""),
        ],
        {
            "compFailure.rs": COMP_FAILURE,
            "compNoExercise.rs": COMP_SUCCESS,
            "testFailure.rs": TEST_FAILURE,
            "testNotPassed.rs": TEST_NOT_PASSED,
        },
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def state_dir(tmp_path, monkeypatch):
    _write_fixture(
        tmp_path,
        [
            ("finished_exercise", "finished_exercise.rs", "compile", ""),
            ("pending_exercise", "pending_exercise.rs", "compile", ""),
            ("pending_test_exercise", "pending_test_exercise.rs", "test", ""),
        ],
        {
            "finished_exercise.rs": FINISHED,
            "pending_exercise.rs": PENDING,
            "pending_test_exercise.rs": PENDING_TEST,
        },
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def toolchain():
    compiled = {}

    def fake_run(args, **kwargs):
        args = [str(a) for a in args]
        if args[0] == "rustc":
            if "--version" in args:
                return subprocess.CompletedProcess(args, 0, b"", b"")
            source = next(a for a in args if a.endswith(".rs"))
            if "Failure" in source:
                return subprocess.CompletedProcess(
                    args, 1, b"", b"error: expected pattern, found `}`"
                )
            compiled["source"] = source
            return subprocess.CompletedProcess(args, 0, b"", b"")
        source = compiled.get("source", "")
        if "testNotPassed" in source:
            return subprocess.CompletedProcess(args, 101, b"test not_passing ... FAILED\n", b"")
        if "testSuccess" in source:
            return subprocess.CompletedProcess(args, 0, b"THIS TEST TOO SHALL PASS\n", b"")
        return subprocess.CompletedProcess(args, 0, b"", b"")

    with mock.patch("subprocess.run", side_effect=fake_run) as patched:
        yield patched


def test_version_flag(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out == "v4.5.0\n"


def test_fails_when_in_wrong_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1


def test_runs_without_arguments(success_dir, toolchain, capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "welcome to" in out
    assert "Thanks for installing!" in out


def test_missing_rustc_fails(success_dir, capsys):
    with mock.patch("subprocess.run", side_effect=FileNotFoundError):
        assert main(["list"]) == 1
    assert "We cannot find `rustc`." in capsys.readouterr().out


def test_rustc_exists_reports_status():
    ok = subprocess.CompletedProcess(["rustc"], 0)
    bad = subprocess.CompletedProcess(["rustc"], 1)
    with mock.patch("subprocess.run", return_value=ok):
        assert rustc_exists() is True
    with mock.patch("subprocess.run", return_value=bad):
        assert rustc_exists() is False
    with mock.patch("subprocess.run", side_effect=FileNotFoundError):
        assert rustc_exists() is False


def test_verify_all_success(success_dir, toolchain):
    assert main(["verify"]) == 0


def test_verify_fails_if_some_fails(failure_dir, toolchain):
    assert main(["verify"]) == 1


def test_run_single_compile_success(success_dir, toolchain):
    assert main(["run", "compSuccess"]) == 0


def test_run_single_compile_failure(failure_dir, toolchain):
    assert main(["run", "compFailure"]) == 1


def test_run_single_test_success(success_dir, toolchain):
    assert main(["run", "testSuccess"]) == 0


def test_run_single_test_failure(failure_dir, toolchain):
    assert main(["run", "testFailure"]) == 1


def test_run_single_test_not_passed(failure_dir, toolchain):
    assert main(["run", "testNotPassed.rs"]) == 1


def test_run_single_test_no_filename(success_dir, toolchain):
    with pytest.raises(SystemExit) as exit_info:
        main(["run"])
    assert exit_info.value.code == 1


def test_run_single_test_no_exercise(failure_dir, toolchain, capsys):
    assert main(["run", "compNoExercise.rs"]) == 1
    assert "No exercise found for 'compNoExercise.rs'!" in capsys.readouterr().out


def test_get_hint_for_single_test(failure_dir, toolchain, capsys):
    assert main(["hint", "testFailure"]) == 0
    assert capsys.readouterr().out == "Hello!\n"


def test_run_compile_exercise_does_not_prompt(state_dir, toolchain, capsys):
    assert main(["run", "pending_exercise"]) == 0
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_run_test_exercise_does_not_prompt(state_dir, toolchain, capsys):
    assert main(["run", "pending_test_exercise"]) == 0
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_run_single_test_success_with_output(success_dir, toolchain, capsys):
    assert main(["--nocapture", "run", "testSuccess"]) == 0
    assert "THIS TEST TOO SHALL PAS" in capsys.readouterr().out


def test_run_single_test_success_without_output(success_dir, toolchain, capsys):
    assert main(["run", "testSuccess"]) == 0
    assert "THIS TEST TOO SHALL PAS" not in capsys.readouterr().out


def test_list_succeeds(success_dir, toolchain, capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "compSuccess" in out
    assert "Pending" not in out


def test_list_both_done_and_pending(state_dir, toolchain, capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Done" in out and "Pending" in out


def test_list_solved_only(state_dir, toolchain, capsys):
    assert main(["list", "--solved"]) == 0
    assert "Pending" not in capsys.readouterr().out


def test_list_unsolved_only(state_dir, toolchain, capsys):
    assert main(["list", "--unsolved"]) == 0
    assert "Done" not in capsys.readouterr().out


def test_list_exercises_paths_and_progress(state_dir):
    buf = io.StringIO()
    done = list_exercises(load_exercises("info.toml"), paths=True, out=buf)
    assert done == 1
    assert buf.getvalue().splitlines() == [
        "finished_exercise.rs",
        "pending_exercise.rs",
        "pending_test_exercise.rs",
        "Progress: You completed 1 / 3 exercises (33.33 %).",
    ]


def test_list_exercises_filter_is_case_insensitive(state_dir):
    buf = io.StringIO()
    list_exercises(load_exercises("info.toml"), names=True, filter="PENDING_TEST", out=buf)
    assert buf.getvalue().splitlines()[0] == "pending_test_exercise"
    assert len(buf.getvalue().splitlines()) == 2


def test_list_exercises_filter_skips_blank_patterns(state_dir):
    buf = io.StringIO()
    list_exercises(load_exercises("info.toml"), names=True, filter=", ,finished", out=buf)
    assert buf.getvalue().splitlines()[0] == "finished_exercise"
    assert len(buf.getvalue().splitlines()) == 2


def test_list_exercises_table_header():
    buf = io.StringIO()
    assert list_exercises([], out=buf) == 0
    lines = buf.getvalue().splitlines()
    assert lines[0].startswith("Name")
    assert "Status" in lines[0]
    assert lines[-1] == "Progress: You completed 0 / 0 exercises (NaN %)."


def test_find_exercise_by_name(state_dir):
    exercises = load_exercises("info.toml")
    assert find_exercise("pending_exercise", exercises).name == "pending_exercise"


def test_find_exercise_next_is_first_pending(state_dir):
    exercises = load_exercises("info.toml")
    assert find_exercise("next", exercises).name == "pending_exercise"


def test_find_exercise_unknown_raises(state_dir):
    with pytest.raises(ExerciseNotFound, match="No exercise found for 'nope'!"):
        find_exercise("nope", load_exercises("info.toml"))


def test_find_exercise_next_when_all_done(success_dir):
    with pytest.raises(ExerciseNotFound, match="no more exercises"):
        find_exercise("next", load_exercises("info.toml"))


def test_parser_list_options():
    args = build_parser().parse_args(["list", "-p", "-f", "abc", "-u"])
    assert args.command == "list"
    assert args.paths is True
    assert args.filter == "abc"
    assert args.unsolved is True
    assert args.solved is False


def test_watch_returns_when_everything_passes(success_dir, toolchain, capsys):
    watch(load_exercises("info.toml"), False)
    assert capsys.readouterr().out.startswith("\x1bc")


def test_main_watch_completes(success_dir, toolchain, capsys):
    assert main(["watch"]) == 0
    assert "All exercises completed!" in capsys.readouterr().out