"""Results writing exports."""

from .result_lines_writer import outcome_record, render_result_lines, write_result_lines

__all__ = ["outcome_record", "render_result_lines", "write_result_lines"]
