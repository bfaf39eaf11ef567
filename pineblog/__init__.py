"""
pineblog-core - command/query processing core for a blog backend.

Commands and queries flow through a single Dispatcher, which runs the
registered validator before the handler and always answers with a Result.
"""

__version__ = "0.1.0"
