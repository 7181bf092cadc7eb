"""Strict JSON reading with precise error positions and streaming of concatenated values."""

__version__ = "0.1.0"
__all__ = ["deserializer", "errors", "position", "scanner", "skip", "stream"]