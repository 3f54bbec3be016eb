"""
html-stitcher - compose HTML documents from partial files

Custom tags named after partial files are replaced by the partial's
rendered content, with ${name} parameters and preserved indentation.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
