"""Main entry point for the rsvpreader package."""

from rsvpreader.cli import main

if __name__ == "__main__":
    main()
