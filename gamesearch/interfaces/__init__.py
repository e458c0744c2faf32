"""
gamesearch.interfaces - User interfaces for gamesearch
"""

# Don't import anything here to avoid circular imports
__all__ = []
