from .parser import parse, parse_text

__all__ = ["parse", "parse_text"]
