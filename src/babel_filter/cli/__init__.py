"""
Command-line interface entry points for babel-filter.

Entry points:
- babel-filter: Filter a Babel directory against a filter node list
"""
