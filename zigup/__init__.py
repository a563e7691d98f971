"""
zigup - a version manager for the Zig compiler toolchain.

Fetches the Zig version index, installs the latest (or a requested) release
for the running platform, and keeps a ``zig`` wrapper on the search path
pointing at it.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
