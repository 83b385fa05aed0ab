"""debstage: stage and build a Debian package for a systemd timer service."""

__version__ = "0.1.0"
