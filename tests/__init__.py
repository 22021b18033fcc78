"""
Test Package for MCP Solana Tracker

This package contains the test suite for the MCP Solana Tracker server. The
integration tests drive the catalog, the dispatcher and the MCP handlers
directly, with the Solana Tracker API replaced by an in-process mock transport.

Test Structure:
- integration/: Tests for the catalog, dispatcher, server handlers and config
- integration/conftest.py: Pytest fixtures (mock upstream, dispatcher, server module)
"""

# Test package for mcp-solana-tracker
