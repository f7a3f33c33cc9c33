"""Interaction action plugin: pause a workflow step until a human decides."""

__version__ = "1.1.1"
