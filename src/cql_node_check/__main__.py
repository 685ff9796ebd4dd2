"""Entry point for running the node check as a module."""

from . import main

if __name__ == "__main__":
    main()
