"""rsvpreader - RSVP speed reading for Logseq pages and markdown notes."""

__version__ = "0.1.0"
