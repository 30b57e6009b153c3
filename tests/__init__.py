"""
Halo Quotes API Test Suite
==========================

This package contains tests for the quote service including:
- Unit tests for individual components
- Integration tests for the HTTP surface against a mocked quote origin
"""
