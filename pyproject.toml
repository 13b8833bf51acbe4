[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "starframe"
version = "0.1.0"
description = "Character frame buffer for ANSI terminals, with box and line drawing, key decoding, simple prompts and a streaming JSON tokenizer"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "framebuffer", "ansi", "box-drawing", "bresenham", "json", "tokenizer", "pull-parser"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: File Formats :: JSON",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
starframe-json = "starframe.jsontool:main"

[tool.hatch.build.targets.wheel]
packages = ["starframe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
