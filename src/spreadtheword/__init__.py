"""spreadtheword: release notes from git history, grouped by tracker item."""

from spreadtheword.generator import Changelog, ChangelogGenerator

__version__ = "0.1.0"

__all__ = ["Changelog", "ChangelogGenerator", "__version__"]
