# tests/property/__init__.py
"""Property-based tests for rankline.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- core/: rank arithmetic, placement through RankEngine, ordered-table state machine
"""
