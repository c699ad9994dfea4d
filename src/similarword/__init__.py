"""
similarword: similar-spelling and synonym lookup over a word dictionary.
"""

__version__ = "0.1.0"
