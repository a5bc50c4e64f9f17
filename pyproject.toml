[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dbhooks"
version = "0.1.0"
description = "Hookable database driver wrappers, SQL logging adapters and a thin Redis client layer"
requires-python = ">=3.10"
dependencies = [
    "redis",
]
keywords = ["database", "hooks", "sql", "driver", "logging", "slow-query", "redis"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dbhooks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
