"""Black/white/red error diffusion dithering for tri-color e-paper panels."""

__version__ = "0.1.0"
