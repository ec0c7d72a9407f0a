# topmark:header:start
#
#   project      : GetDoc
#   file         : exit_codes.py
#   file_relpath : src/getdoc/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the GetDoc CLI.

Error codes follow the BSD `sysexits` convention. A written report always
exits with `SUCCESS`, whatever the compiler reported.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes of ``getdoc``.

    Attributes:
        SUCCESS: A report was written.
        FAILURE: Any other failure.
        USAGE_ERROR: Conflicting command-line flags (BSD ``EX_USAGE``).
        IO_ERROR: The report could not be written (BSD ``EX_IOERR``).
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 64  # EX_USAGE
    IO_ERROR = 74  # EX_IOERR
