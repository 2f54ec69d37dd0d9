"""Agent tool registrations for the specledger MCP server."""

from specledger.tools.specs import register_spec_tools

__all__ = ["register_spec_tools"]
