"""Convex brush geometry, map class metadata, lighting animation and irradiance volume helpers."""

__version__ = "0.8.1"
__all__ = ["brush", "bsp", "lighting", "irradiance", "fgd", "classinfo"]