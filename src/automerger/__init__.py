"""automerger - Merge pull requests once they satisfy a configurable policy."""

__version__ = "0.1.0"
