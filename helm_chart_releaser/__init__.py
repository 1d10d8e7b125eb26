"""Helm Chart Releaser.

Packages changed Helm charts, pushes them to an OCI registry and publishes
matching GitHub releases.
"""

__version__ = "0.1.0"
