"""Implementations of the hdcompare subcommands."""
