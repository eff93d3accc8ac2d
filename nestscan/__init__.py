"""nestscan — find nested Subversion working copies under a directory."""

__version__ = "0.1.0"
