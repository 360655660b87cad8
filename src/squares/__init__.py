"""QR code generator with no dependencies

Byte mode, error correction level M, versions 1 through 13.
"""
import logging

from .image import to_data_url, to_raster
from .qrcode import (
    DataTooLongError, DecodeError, ModuleMatrix, QRCode, decode, generate
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
