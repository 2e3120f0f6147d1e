"""
SimpleLang Command-Line Interface
=================================

- **slc**: SimpleLang compiler

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["slc"]
