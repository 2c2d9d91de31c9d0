"""Core domain package for the integrity check viewer.

Core contains the message model, column filtering and row navigation logic
without any Textual or file-format specific code, keeping it testable
without a rendering surface.
"""
