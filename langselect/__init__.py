"""Runtime language switching with message catalogs and editable text translation files."""

__version__ = "0.1.0"