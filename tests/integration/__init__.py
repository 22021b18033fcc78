"""
Integration Tests for MCP Solana Tracker

These tests exercise the full dispatch path of every tool: catalog lookup,
argument checks, request construction, the outbound HTTP call and the mapping
of the upstream response (or error) to a tool result / MCP error.

Test files:
- conftest.py: Pytest fixtures and test configuration
- test_catalog.py: Catalog / request-template consistency
- test_dispatcher.py: Request construction, pass-through and error taxonomy
- test_server.py: list_tools / call_tool handlers and MCP error codes
- test_config.py: Environment based settings

All upstream calls go through httpx.MockTransport, so no network access or
real API key is required.
"""

# Integration tests for mcp-solana-tracker
