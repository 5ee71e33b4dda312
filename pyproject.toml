[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arcadenotes"
version = "0.1.0"
description = "Small arcade games and effect demos: a sliding-tile 2048, a falling-blocks puzzle, a fire effect, plus stereo panning and airship steering logic."
requires-python = ">=3.10"
keywords = ["game", "2048", "puzzle", "falling blocks", "pygame", "demo", "fire effect"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pygame>=2.1",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
arcadenotes-2048 = "arcadenotes.twenty48.app:main"
arcadenotes-blocks = "arcadenotes.blocks.app:main"
arcadenotes-doomfire = "arcadenotes.demos.doomfire:main"

[tool.hatch.build.targets.wheel]
packages = ["arcadenotes"]

[tool.hatch.build.targets.sdist]
include = ["arcadenotes", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
