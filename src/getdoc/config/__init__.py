# topmark:header:start
#
#   project      : GetDoc
#   file         : __init__.py
#   file_relpath : src/getdoc/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for GetDoc.

Layered settings (defaults, the manifest's ``[package.metadata.getdoc]``
table, CLI overrides) live in [`getdoc.config.model`][getdoc.config.model];
manifest I/O lives in [`getdoc.config.manifest`][getdoc.config.manifest].
Importers use the submodules directly so that this package stays import-light.
"""

from __future__ import annotations
