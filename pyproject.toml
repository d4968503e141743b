[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sproutee"
version = "0.1.0"
description = "Create Git worktrees and copy configured files into them"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "worktree", "cli", "developer-tools"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sproutee = "sproutee.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sproutee"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
