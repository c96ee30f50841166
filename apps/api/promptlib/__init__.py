"""Prompt library: template variable engine, selection resolver, and the REST service around them."""

__version__ = "0.1.0"
