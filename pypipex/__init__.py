"""Run command pipelines between an input file and an output file."""

__version__ = "0.1.0"
__all__ = ["__version__"]