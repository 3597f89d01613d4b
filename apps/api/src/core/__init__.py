"""Core application components.

This module provides the foundational components for the AssetDesk API:
- Application settings and configuration
"""
