[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "penumbra"
version = "0.1.0"
description = "Roguelike game rules whose dungeons draw on commit history or calendar events"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = ["roguelike", "git", "calendar", "ics", "game", "field-of-view", "shadowcasting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["penumbra"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
