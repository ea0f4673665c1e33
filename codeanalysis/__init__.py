"""Source-code analysis over HTTP: syntax trees, comment removal, metrics and function spans."""

__version__ = "0.1.0"
