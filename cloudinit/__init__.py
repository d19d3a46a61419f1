"""Building blocks for applying cloud-config style settings to a Linux host."""

__version__ = "0.1.0"