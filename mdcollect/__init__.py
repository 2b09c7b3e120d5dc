"""mdcollect: concatenate a directory's source files into one Markdown document."""

__version__ = "0.1.0"
