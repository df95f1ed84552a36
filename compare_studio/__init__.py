# Path: compare_studio/__init__.py
# Purpose: Package initializer for the Compare Studio application.
# Layer: root.
# Details: Groups configuration, core engines, and the session layer.

__version__ = "0.1.0"
