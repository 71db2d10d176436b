"""Splitting blocks into test classes and writing them below an output directory."""
from __future__ import annotations

import itertools
import logging
import pathlib
from typing import Iterable, Iterator, List

from opcrash.core.types import TypeRef
from opcrash.errors import InvalidArgumentError
from opcrash.planner.blocks import Block

from .junit import JUnitTestCaseWriter

logger = logging.getLogger(__name__)


def batch_blocks(blocks: Iterable[Block], methods_per_file: int) -> Iterator[List[Block]]:
    """Consume ``blocks`` lazily in lists of at most ``methods_per_file``."""

    if methods_per_file < 1:
        raise InvalidArgumentError(f"methods_per_file must be positive, got {methods_per_file}")
    return _batches(iter(blocks), methods_per_file)


def _batches(blocks: Iterator[Block], size: int) -> Iterator[List[Block]]:
    while True:
        batch = list(itertools.islice(blocks, size))
        if not batch:
            return
        yield batch


def unit_path(out_dir: str | pathlib.Path, type_under_test: TypeRef, test_name: str) -> pathlib.Path:
    directory = pathlib.Path(out_dir)
    if type_under_test.namespace:
        directory = directory.joinpath(*type_under_test.namespace.split("."))
    return directory / f"{test_name}.java"


def write_test_units(
    type_under_test: TypeRef,
    blocks: Iterable[Block],
    out_dir: str | pathlib.Path,
    *,
    classify: bool = True,
    methods_per_file: int = 500,
    comment: str = "",
) -> List[pathlib.Path]:
    """Write ``blocks`` as one or more JUnit classes and return the written paths.

    A single class is unsuffixed (``LoadeeTest.java``); when the blocks need
    more than one class they are numbered from 1 (``LoadeeTest1.java``, ...).
    Blocks are consumed one class at a time, so ``blocks`` may be a generator.
    """

    batches = batch_blocks(blocks, methods_per_file)
    written: List[pathlib.Path] = []
    batch = next(batches, None)
    number = 0
    while batch is not None:
        following = next(batches, None)
        number += 1
        suffix = 0 if number == 1 and following is None else number
        writer = JUnitTestCaseWriter(type_under_test, comment, classify, batch, suffix)
        path = unit_path(out_dir, type_under_test, writer.get_simple_test_name())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(writer.render_test_unit(), encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write test class to {path}: {exc}") from exc
        logger.debug("wrote %d test method(s) to %s", len(batch), path)
        written.append(path)
        batch = following
    return written
