"""
filesearch - Core Package

A terminal file finder that searches the filesystem for paths containing a
substring, fanning the walk out across worker threads.
"""

__version__ = "0.1.0"
__author__ = "filesearch Team"
