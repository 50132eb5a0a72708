[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zyn"
version = "0.1.0"
description = "A small project manager for C and C++: scaffolding, git dependencies, cached builds and IDE configs."
requires-python = ">=3.11"
dependencies = ["tomlkit"]
keywords = ["build", "c", "c++", "dependencies", "project-manager", "cmake"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: C",
    "Programming Language :: C++",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
zyn = "zyn.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["zyn"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
