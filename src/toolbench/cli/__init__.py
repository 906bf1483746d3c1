"""
Toolbench command-line interface.

Commands:
- check: verify tool identities (run in CI before shipping)
- tools: list discovered tools
- serve: run the HTTP server
"""
