"""
zh-numerals — Convert between integers and Chinese numerals, both ways.

Architecture: Glyph tables → Recursive-descent parser / Recursive formatter → Line converter
Philosophy:  Read every form people write. Write only the canonical one.
"""

__version__ = "1.0.0"
