from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from testgen.schemas.testcase import Focus, TestCase, TestStep


class StepSuggester(ABC):
    """
    Interface for backends that propose additional steps for a test case.

    Implementations must not mutate the test case they are given; the
    enhancement pipeline appends whatever steps are returned, in order.
    """

    @abstractmethod
    def suggest_steps(self, test_case: TestCase, focus: Focus) -> List[TestStep]:
        """
        Return the steps to append to ``test_case`` for ``focus``.

        An empty list leaves the test case unchanged.
        """
        ...
