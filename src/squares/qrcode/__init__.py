from .errors import DataTooLongError, DecodeError
from .matrix import ModuleMatrix
from .qrcode import QRCode, generate, select_version
from .reader import decode
