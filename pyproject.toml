[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "guifile_toolkit"
version = "0.1.0"
description = "Read and write game GUI layout records, inspect DDS textures, and model an editor's menus, tabs and shortcuts."
requires-python = ">=3.10"
dependencies = []
keywords = ["gui", "binary", "file-format", "dds", "texture", "dxgi", "editor"]
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
    "Topic :: File Formats",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["guifile_toolkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
