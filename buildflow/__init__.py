"""
Buildflow: CI workflow generation for mobile app build pipelines.

Resolves a (platform, SDK, build type) selection into a ready-to-use
workflow definition plus the setup notes for the steps it cannot automate.
"""

__version__ = "0.3.0"
__author__ = "Buildflow Team"
