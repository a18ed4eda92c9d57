"""Preview editor CLI: edit a page's regions and share them as a preview."""

__version__ = "0.1.0"
