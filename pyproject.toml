[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "protoact"
version = "0.1.0"
description = "Game logic for a side-scrolling action game: map files, player physics and weapons, input, settings, audio bookkeeping and frame pacing."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "platformer", "action", "side-scrolling", "tile-map", "input"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["protoact"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
