"""thread_matcher.core — Foundation layer.

Contains colour types, colour-space conversion, distance metrics, palette
matching, the thread catalog, configuration and the report builder.
This module has NO dependencies on thread_matcher.commands or thread_matcher.registry.
Only the standard library is used here; image handling lives in the commands.
"""
