"""
errors.py — Exception types raised by the tidy-data pipeline.

Each stage raises one of these with a message prefixed by the stage name
(``[acquire]``, ``[load]``, ...).  The concrete classes also derive from the
builtin that fits the failure, so ``except ValueError`` still catches a
structural problem.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for every error raised by the pipeline."""


class DatasetUnavailableError(PipelineError, RuntimeError):
    """The raw dataset could not be downloaded, extracted, or is incomplete."""


class PipelineIOError(PipelineError, OSError):
    """An input file could not be read or the output could not be written."""


class StructuralMismatchError(PipelineError, ValueError):
    """Row or column counts disagree between tables that must line up."""


class MisalignedSplitError(StructuralMismatchError):
    """X / y / subject files of one split have different row counts."""


class AlignmentMismatchError(StructuralMismatchError):
    """Inputs to the assembler do not describe the same rows."""


class UnknownActivityError(PipelineError, ValueError):
    """An activity code outside the known 1–6 range was found."""
