"""Rendering blocks as one JUnit test class."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from opcrash.core.types import TypeRef
from opcrash.errors import InvalidArgumentError
from opcrash.planner.blocks import NL, TAB, Block

from . import templates


class JUnitTestCaseWriter:
    """Wraps each block in its own ``testN`` method of ``<Name>Test``.

    With ``classify`` the generated class extends the filtering base class
    and every block runs inside ``try``/``dispatchException`` so that expected
    failures are told apart from crashes. A ``suffix`` of zero or less means
    no suffix.
    """

    def __init__(
        self,
        type_under_test: TypeRef,
        namespace_comment: str,
        classify: bool,
        blocks: Sequence[Block],
        suffix: int = 0,
    ) -> None:
        if type_under_test is None:
            raise InvalidArgumentError("JUnitTestCaseWriter requires the type under test")
        if namespace_comment is None:
            raise InvalidArgumentError("JUnitTestCaseWriter requires a comment (may be empty)")
        if blocks is None:
            raise InvalidArgumentError("JUnitTestCaseWriter requires blocks (may be empty)")
        self.type_under_test = type_under_test
        self.namespace_comment = namespace_comment
        self.classify = classify
        self.blocks: Tuple[Block, ...] = tuple(blocks)
        self.suffix = suffix

    def get_simple_test_name(self) -> str:
        name = f"{self.type_under_test.name}Test"
        if self.suffix > 0:
            name += str(self.suffix)
        return name

    def get_tested_meth_name(self, block: Optional[Block] = None) -> Optional[str]:
        """Name of the operation ``block`` tests, or the one shared by all blocks.

        Without a block, returns ``None`` unless every block tests the same
        operation. Constructors are named ``<init>``.
        """

        if block is not None:
            return block.operation.name
        operations = {b.operation for b in self.blocks}
        if len(operations) != 1:
            return None
        return next(iter(operations)).name

    def _shared_operation_name(self) -> Optional[str]:
        operations = {b.operation for b in self.blocks}
        if len(operations) != 1:
            return None
        return next(iter(operations)).qualified_name()

    def get_header(self) -> str:
        return templates.header(self.get_simple_test_name(), self.classify)

    def get_test_cases(self) -> str:
        methods = []
        for number, block in enumerate(self.blocks):
            if self.classify:
                body = block.render(TAB + TAB, self.type_under_test)
                methods.append(templates.classified_test_method(number, body))
            else:
                body = block.render(TAB, self.type_under_test)
                methods.append(templates.plain_test_method(number, body))
        return "".join(NL + method for method in methods)

    def get_footer(self) -> str:
        test_name = self.get_simple_test_name()
        text = ""
        if self.classify:
            shared = self._shared_operation_name()
            if shared is not None:
                text += templates.tested_method_accessor(shared)
        return text + templates.footer(test_name)

    def render_test_unit(self) -> str:
        parts = []
        if self.type_under_test.namespace:
            parts.append(f"package {self.type_under_test.namespace};" + NL + NL)
        if self.namespace_comment:
            parts.append(self.namespace_comment.rstrip(NL) + NL)
        parts.append(self.get_header())
        parts.append(self.get_test_cases())
        parts.append(NL)
        parts.append(self.get_footer())
        parts.append("}" + NL)
        return "".join(parts)


def render_test_unit(
    type_under_test: TypeRef,
    blocks: Sequence[Block],
    classify: bool,
    suffix: int = 0,
    comment: str = "",
) -> str:
    return JUnitTestCaseWriter(type_under_test, comment, classify, blocks, suffix).render_test_unit()
