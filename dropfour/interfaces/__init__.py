"""
dropfour.interfaces - Front ends for the engine

This package contains the command-line driver and the Gymnasium environment.
Neither is imported here so that the CLI does not pull in gymnasium.
"""

__all__ = []
