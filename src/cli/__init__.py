"""
CLI (Command Line Interface) for HTTP Response Comparator.

This is a thin wrapper around the core engine. All business logic lives
in the comparator package so it can be reused by other callers.
"""
