"""
Entry point for running zigup as a module.

Usage: python -m zigup [command] [options]
"""

from zigup.cli.parser import main

if __name__ == "__main__":
    main()
