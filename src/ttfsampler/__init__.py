"""ttfsampler - Decode TrueType glyph outlines and sample them by arc length.

ttfsampler reads a TrueType font directly from its binary tables, resolves
Unicode codepoints through the format 4 cmap, decodes simple glyph outlines,
restores the implied on-curve points of their quadratic splines and exposes
an arc-length parameterized sampling of every contour.

Example:
    >>> import ttfsampler
    >>> reader = ttfsampler.load("DejaVuSans.ttf")  # doctest: +SKIP
    >>> glyph = reader.get_glyph(ord("A"))  # doctest: +SKIP
    >>> reader.sample_path(glyph.get_path(0)).evaluate(0.5)  # doctest: +SKIP
"""

from ttfsampler.io import FontReader, load

__version__ = "0.1.0"

__all__ = ["FontReader", "__version__", "load"]
