"""thread-match subcommands, one per module.

A module here becomes a subcommand by defining a module-level `command`
(see thread_matcher.core.types.Command); its docstring is the text shown
by `thread-match help <name>`.
"""
