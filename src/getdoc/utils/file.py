# topmark:header:start
#
#   file         : file.py
#   file_relpath : src/getdoc/utils/file.py
#   project      : GetDoc
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path display helpers for GetDoc."""

from pathlib import Path


def display_path(file_name: str, root_path: Path) -> str:
    """Return ``file_name`` relative to ``root_path`` when it lies below it.

    The comparison is purely lexical: absolute paths outside ``root_path`` and
    relative paths are returned unchanged.

    Args:
        file_name (str): The path as reported by the compiler.
        root_path (Path): The project root.

    Returns:
        str: The path to show to the user.
    """
    path = Path(file_name)
    if not path.is_absolute():
        return file_name
    try:
        return str(path.relative_to(root_path))
    except ValueError:
        return file_name
