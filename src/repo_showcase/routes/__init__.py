"""HTTP routes served alongside the MCP endpoint.

Importing this package registers the routes on the shared FastMCP app.
"""

from . import repos, starred

__all__ = ["repos", "starred"]
