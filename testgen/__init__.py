"""
API Testcase Generator: turns API collections and web pages into
structured test cases for downstream test framework generators.
Flat structure: api/, core/, providers/, schemas/, services/, utils/.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
