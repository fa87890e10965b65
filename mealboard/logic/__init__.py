"""Core dashboard logic layer.

Subpackages:
- normalize: turning loose export records into the fixed 7 x 3 dashboard model
- layout: column sizing, text wrapping and image fitting
- charts: donut wedges and allocation bar widths
"""
__all__ = ["normalize", "layout", "charts"]
