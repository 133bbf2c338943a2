"""
Package entry point.

Allows running the application via:

    python -m catalogsearch

This simply forwards execution to catalogsearch.cli.main().
"""

from catalogsearch.cli import main

if __name__ == "__main__":
    main()
