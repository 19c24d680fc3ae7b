"""
Album Code Archiver

A maintenance tool that reads album codes from image filenames in a local
folder, finds the photo upload links recorded for each code, and retags links
created before a cutoff date with an archived album code after operator
confirmation.
"""

__version__ = "1.0.0"
__author__ = "Album Archiver Team"
