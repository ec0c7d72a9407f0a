# topmark:header:start
#
#   project      : GetDoc
#   file         : __main__.py
#   file_relpath : src/getdoc/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running GetDoc via ``python -m getdoc``.

It delegates directly to :func:`getdoc.cli.main.cli`, so the console script and
the module interface share a single entry point.

Examples:
    Run GetDoc for two focus features::

        python -m getdoc --features serde,std
"""

from __future__ import annotations

from getdoc.cli.main import cli

if __name__ == "__main__":
    cli()
