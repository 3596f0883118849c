"""
Step suggestion abstraction layer.

Backends that propose extra steps for a test case implement StepSuggester.
The enhancement pipeline depends only on that interface.
"""

from testgen.providers.base import StepSuggester
from testgen.providers.factory import get_suggester

__all__ = ["StepSuggester", "get_suggester"]
