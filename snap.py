"""CLI entry point - wrapper for running from a source checkout

    python snap.py login
"""

from cli.main import main

if __name__ == "__main__":
    main()
