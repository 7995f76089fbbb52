[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "matchcond"
version = "0.1.0"
description = "Composable match conditions for describing invoices, jobs, timesheets, employees and the records around them"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "invoice",
    "timesheet",
    "query",
    "filter",
    "condition",
    "match",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["matchcond"]

[tool.hatch.build.targets.sdist]
include = ["matchcond", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
