"""
Interactive terminal front end for filesearch.
"""

from .app import App, Focus
from .keys import Key, KeyPress, KeyReader, decode_keys
from .render import render

__all__ = ['App', 'Focus', 'Key', 'KeyPress', 'KeyReader', 'decode_keys', 'render']
