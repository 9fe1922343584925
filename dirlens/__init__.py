"""dirlens - infer the purpose of every directory in a source tree."""

__version__ = "0.1.0"
