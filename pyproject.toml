[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bbw"
version = "0.1.0"
description = "A two-player top-down arcade battle game with water bombs and power-up items"
requires-python = ">=3.10"
keywords = ["game", "arcade", "pygame", "two-player", "gif"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bbw = "bbw.game:main"

[tool.hatch.build.targets.wheel]
packages = ["bbw"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
