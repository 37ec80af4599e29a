"""MCP tools implementation package.

Importing this package registers the repository listing tools on the
shared FastMCP server.
"""

from . import repo_list

__all__ = ["repo_list"]
