"""
EventLog: A personal log of dated, categorized events.

Provides both a CLI and library API for listing, adding and deleting
events kept in a CSV record file under the user's home directory.
"""

__version__ = "0.1.0"
