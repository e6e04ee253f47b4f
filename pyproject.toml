[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proofofduel"
version = "0.1.0"
description = "A two-player networked reflex duel: type the key sequence first to fire."
requires-python = ">=3.10"
keywords = ["game", "duel", "multiplayer", "pygame", "reflex"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
proofofduel = "proofofduel.app:main"
proofofduel-server = "proofofduel.server:main"

[tool.hatch.build.targets.wheel]
packages = ["proofofduel"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
