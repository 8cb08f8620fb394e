"""Site admin backend: image uploads, site content config and admin credentials."""

__version__ = "0.1.0"
