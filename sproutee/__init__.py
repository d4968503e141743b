"""Create Git worktrees, copy configured files into them, list and clean them up."""

__version__ = "0.1.0"