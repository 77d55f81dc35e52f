"""
Utility functions and result types
"""

from .base import Outcome, OutcomeTag
from .io_utils import read_source_file, write_output_file, default_output_path
