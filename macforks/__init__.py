"""Read and write Macintosh files with forks: MacBinary II, BinHex 4.0 and Mac OS Roman text."""

__version__ = "0.1.0"

__all__ = ["binhex", "charset", "crc", "hqx", "macbinary", "macfile", "transfer"]