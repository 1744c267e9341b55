from enum import Enum

# This file maintains constants that are passed around through the application.
# User-provided values are anchored on schema.yaml and turned into command line
# arguments by schema_config.py. cli.py passes them on to orchestrator.py, which
# translates the 'dirty' config values into the constants and option bundles
# defined here. Deeper classes should therefore NOT be reading config variables
# (beyond logging verbosity).

# Token users type on the command line to request a tab delimiter
TAB_TOKEN = "\\t"

# Joins a user label to the front of every header
LABEL_SEPARATOR = "|"

# Default delimiter when none is given
DEFAULT_SEPARATOR = ","

# Index value that means "no header columns requested"
NO_COLUMN_INDEX = -1


class CloneMode(Enum):
    """How records are collected into clone groups before printing."""
    NONE = "none"
    SORTED = "sorted"
    ADJACENT = "adjacent"

    @classmethod
    def from_flags(cls, include_clone: bool, sort_before_clone: bool) -> 'CloneMode':
        if not include_clone:
            return cls.NONE
        return cls.SORTED if sort_before_clone else cls.ADJACENT
