[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "exrunner"
version = "4.5.0"
description = "Run, test and track progress through a course of small compiled programming exercises"
requires-python = ">=3.11"
dependencies = [
    "watchdog",
]
keywords = ["exercises", "education", "learning", "compiler", "course", "watch"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education :: Computer Aided Instruction (CAI)",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
exrunner = "exrunner.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["exrunner"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
