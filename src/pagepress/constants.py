# topmark:header:start
#
#   project      : PagePress
#   file         : constants.py
#   file_relpath : src/pagepress/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PagePress Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

PAGEPRESS_VERSION: str = get_version("pagepress")

PROGRAM_NAME: Final[str] = "PagePress"

COPYRIGHT_TEXT: Final[str] = f"{PROGRAM_NAME} {PAGEPRESS_VERSION}, (c) 2025 Olivier Biot"

# Name of the profile every other profile ultimately inherits from.
DEFAULT_TYPE: Final[str] = "default"

# Configuration files looked up in the working directory and the user's home.
PROJECT_CONFIG_NAME: Final[str] = "pagepress.toml"
PYPROJECT_CONFIG_NAME: Final[str] = "pyproject.toml"
USER_CONFIG_NAME: Final[str] = ".pagepressrc.toml"

# Everything after this marker line is dropped from the input.
END_MARKER: Final[str] = "\n__END__\n"

# Stand-in filename for content read from STDIN.
STDIN_NAME: Final[str] = "-"

LOG_LEVEL_ENV_VAR: Final[str] = "PAGEPRESS_LOG_LEVEL"
