"""Salary-capped DFS lineup builder: valuation, greedy auto-fill and lineup analysis."""

__version__ = "0.1.0"
