"""Entry point for 'python -m nutrilens' command.

This module allows the NutriLens CLI to be invoked using
'python -m nutrilens' or 'python -m nutrilens serve'.
"""

from nutrilens.cli import main

if __name__ == "__main__":
    main()
