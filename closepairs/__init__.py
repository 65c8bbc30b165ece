"""
Close Pairs visualizer.

Plots the subset sums of a fixed catalog of unit vectors and the "close pair"
lines between them, with an interactive zoom/pan viewport served by NiceGUI.
"""

__version__ = "0.1.0"
