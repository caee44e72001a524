"""
CLI entry point for pygrep when executed with `python -m pygrep.cli`.
"""

from .main import main

if __name__ == "__main__":
    main()
