"""
Entry point for running the zigup CLI as a module.

Usage: python -m zigup.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
