"""
AI Creative Studio

Turn a natural-language description of a game or website into a single
self-contained HTML document using a hosted chat-completion model, preview it
in a sandboxed frame, and export it as a zip archive.
"""

__version__ = "0.1.0"
