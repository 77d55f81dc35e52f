"""
Configuration constants for py2ts
"""

import os
import shlex

# Source and output
DEFAULT_FILE_ENCODING = "utf-8"
SOURCE_FILE_EXTENSION = ".py"
OUTPUT_FILE_EXTENSION = ".ts"
DEFAULT_SOURCE_NAME = "<input>"

# Emitted text
INDENT_UNIT = "  "
BLOCK_SEPARATOR = "\n\n"

# Parameter bundling: `def make_point(x=0)` -> `type MakePointOptions = {...}`
OPTIONS_ALIAS_SUFFIX = "Options"

# Prefixes of a triple-quoted string literal (optionally raw)
TRIPLE_QUOTE_PREFIXES = ('"""', "'''", 'r"""', "r'''", 'R"""', "R'''")

# Methods by this name become `constructor`
CONSTRUCTOR_NAME = "__init__"

# Formatter (prettier via subprocess)
PRETTIER_COMMAND = shlex.split(os.environ.get("PY2TS_PRETTIER", "npx --no-install prettier"))
PRETTIER_TIMEOUT = float(os.environ.get("PY2TS_PRETTIER_TIMEOUT", "30"))
PRETTIER_STDIN_FILEPATH = "module.ts"
# Fixed settings for every block; use-tabs and bracket-spacing stay at the defaults
PRETTIER_ARGUMENTS = [
    "--parser", "typescript",
    "--no-semi",
    "--trailing-comma", "all",
    "--single-quote",
    "--print-width", "72",
    "--tab-width", "2",
    "--arrow-parens", "avoid",
    "--quote-props", "as-needed",
    "--prose-wrap", "always",
    "--end-of-line", "lf",
    "--single-attribute-per-line",
]
