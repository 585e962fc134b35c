[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nusspli"
version = "1.0.0"
description = "Title metadata parsing, fake ticket and certificate building, title lookup and self-update helpers for NUS content"
requires-python = ">=3.10"
dependencies = []
keywords = ["nus", "tmd", "ticket", "certificate", "title", "updater"]
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
    "Topic :: System :: Software Distribution",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nusspli"]

[tool.pytest.ini_options]
addopts = "-ra"
