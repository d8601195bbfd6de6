"""
fourway.interfaces - User interfaces for the fourway engine

This package contains front ends that drive a game session.
"""

# Don't import anything here to avoid circular imports
__all__ = []
