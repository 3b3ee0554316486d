"""
guidepack - compose AI-assistant guidance bundles.

guidepack keeps a catalog of static guidance documents (style guides,
communication conventions) and composes named profiles of them into a
single blob for an assistant's context window.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
