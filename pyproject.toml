[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tictactoe"
version = "0.1.0"
description = "Multiplayer tic-tac-toe server speaking a small text protocol over WebSockets"
requires-python = ">=3.10"
keywords = ["tic-tac-toe", "game", "websocket", "server", "multiplayer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: No Input/Output (Daemon)",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "websockets",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
tictactoe = "tictactoe.server:main"

[tool.hatch.build.targets.wheel]
packages = ["tictactoe"]

[tool.pytest.ini_options]
addopts = "-ra"
