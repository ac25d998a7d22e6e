"""Aurora Decision command-line interface."""

from aurora_decision import __version__


__all__ = ["__version__"]
