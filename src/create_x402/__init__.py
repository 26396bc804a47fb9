"""Scaffold x402 example projects from GitHub templates."""

__version__ = "0.2.0"
