"""Main entry point for running QuickNotes as a module.

This allows running with: python -m quicknotes
"""

from .app import main_cli_runner

if __name__ == "__main__":
    main_cli_runner()
