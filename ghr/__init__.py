"""ghr: manage GitHub releases and upload release assets."""

__version__ = "0.1.0"
