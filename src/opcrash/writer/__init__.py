"""JUnit source rendering and test-file output."""
from .files import batch_blocks, unit_path, write_test_units
from .junit import JUnitTestCaseWriter, render_test_unit

__all__ = [
    "JUnitTestCaseWriter",
    "batch_blocks",
    "render_test_unit",
    "unit_path",
    "write_test_units",
]
