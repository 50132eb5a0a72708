"""Project manager for C and C++: scaffolding, dependencies, cached builds and IDE configs."""

__version__ = "0.1.0"