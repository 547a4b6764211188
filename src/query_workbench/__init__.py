"""Query Workbench - multi-tab query editor and result inspector."""

from query_workbench.__about__ import __version__

__all__ = ["__version__"]
