[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "threadlab"
version = "0.1.0"
description = "Small runnable studies in thread coordination: PID control loops, an EDF scheduler, a bounded buffer, ordering primitives and sensor fusion."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "threading",
    "concurrency",
    "pid",
    "scheduler",
    "producer-consumer",
    "condition-variable",
    "sensor-fusion",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
threadlab-pid = "threadlab.pid:main"
threadlab-plant = "threadlab.plant:main"
threadlab-scheduler = "threadlab.scheduler:main"
threadlab-meetings = "threadlab.meetings:main"
threadlab-basics = "threadlab.basics:main"
threadlab-ordering = "threadlab.ordering:main"
threadlab-buffer = "threadlab.buffer:main"
threadlab-fusion = "threadlab.fusion:main"

[tool.hatch.build.targets.wheel]
packages = ["threadlab"]

[tool.hatch.build.targets.sdist]
include = ["threadlab", "tests", "pyproject.toml", "README.md"]

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
