"""
rankline: Collision-free ordering ranks for rows in a SQL table.

Translates an application-visible position into a sparse integer rank,
shifting or rebalancing neighbouring rows only when a rank collides.
"""

__version__ = "0.1.0"
