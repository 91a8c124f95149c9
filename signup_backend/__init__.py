"""Email signup backend with a password-gated admin panel."""

__version__ = "0.1.0"
