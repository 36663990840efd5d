"""
Mock LaunchDarkly Management API for integration testing
"""

__version__ = "1.0.0"
