"""Detection and risk assessment of Beninese personal data in local files."""

__version__ = "0.1.0"
