"""Link-resolution engine for a URL-shortening service."""

__version__ = '0.1.0'
