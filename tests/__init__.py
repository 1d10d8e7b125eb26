"""Test suite for Helm Chart Releaser.

This package contains test modules and fixtures for verifying the functionality
of the Helm Chart Releaser tool. It includes tests for:
- Configuration parsing and validation
- Changed chart discovery
- Release planning and execution
- Git, helm and GitHub adapters
- The command line interface

The test suite uses pytest and provides fixtures for common test scenarios.
"""
