"""
Budget Flow MCP.

Turns a personal budget (revenues, needs, wants and a savings allocation
tree) into a money flow graph and exposes editing tools over MCP.
"""

__version__ = "0.1.0"
