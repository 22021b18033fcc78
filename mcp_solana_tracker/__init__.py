"""
MCP Solana Tracker Package

This package exposes the Solana Tracker market-data REST API as a set of MCP
(Model Context Protocol) tools, so an AI agent can query token prices, holders,
trades, wallet PnL and chart data through a uniform tool-calling interface.

The package is a declarative pass-through: every tool maps to exactly one GET
request against the upstream API, and the JSON body is handed back to the
caller unmodified.

Main components:
- catalog.py: Static, ordered list of tool descriptors and their input schemas
- dispatcher.py: Request templates and the dispatcher that performs the HTTP call
- config.py: Environment / .env based settings
- server.py: MCP server wiring (list_tools / call_tool) and the stdio entry point
"""

__version__ = "0.1.0"
