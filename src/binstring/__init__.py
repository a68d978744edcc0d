"""BINSTRING

Byte-exact string primitives for processes where plain string operations may
have been overloaded with encoding-aware ("multibyte") implementations.
"""

from binstring.domain.arguments import OMITTED
from binstring.domain.capabilities import CapabilityRecord, Family
from binstring.service_layer.dispatcher import BinString

__all__ = ["__version__", "BinString", "CapabilityRecord", "Family", "OMITTED"]
__version__ = "0.10.0"
