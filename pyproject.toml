[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubscene"
version = "0.1.0"
description = "Reader and validator for .cub raycaster scene files and XPM textures"
requires-python = ">=3.10"
dependencies = []
keywords = ["raycaster", "cub", "xpm", "scene", "map", "validation"]
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
    "Topic :: Games/Entertainment :: First Person Shooters",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cubscene = "cubscene.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cubscene"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
