"""pastelize: re-color any web page with the Catppuccin palette."""

__version__ = "0.1.0"
