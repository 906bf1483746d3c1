"""
Toolbench - a box of small, self-describing web tools behind one HTTP entry point.

This package provides:
- Automatic discovery of tool implementations
- Build-time validation of tool identities
- Two-level routing from URL segment to tool to tool-owned sub-paths
"""

__version__ = "0.1.0"
