# topmark:header:start
#
#   project      : GetDoc
#   file         : __init__.py
#   file_relpath : src/getdoc/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GetDoc CLI package.

The console script entry point is defined in ``pyproject.toml`` as::

    [project.scripts]
    getdoc = "getdoc.cli.main:cli"
"""

from __future__ import annotations
