# topmark:header:start
#
#   project      : GetDoc
#   file         : __init__.py
#   file_relpath : src/getdoc/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GetDoc package.

GetDoc rebuilds a Cargo project under several feature configurations, collects
the compiler's JSON diagnostics, and reports which diagnostics point into
third-party crate sources, together with the items found in those sources.
"""

from __future__ import annotations
