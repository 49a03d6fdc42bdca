"""cnp: find and remove unused dependencies declared in package.json."""

__version__ = "1.0.2"
