"""Infrastructure layer.

Configuration, logging setup, and persistence store access.
"""
