"""langpack - localization template resolution."""

__version__ = "1.0.0"
