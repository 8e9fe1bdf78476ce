"""
stackdiff version constants.

Kept in one place so the CLI and the package metadata agree.
"""

# Library version (matches pyproject.toml)
STACKDIFF_VERSION = "0.3.0"
