"""
taskboard: project/task management API over a generic stored-procedure
repository.
"""

__version__ = "0.1.0"
