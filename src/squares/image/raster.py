from base64 import b64encode
from io import BytesIO

from ..qrcode.qrcode import MARGIN_WIDTH, QRCode
from .png import PngQRImage


class RasterImage:
    """Square pixel surface of a QR code with its quiet zone

    Indexing with (x, y) returns 1 for a black pixel and 0 for white.
    """
    def __init__(self, data_bits, module_size):
        self.data_bits = [list(line) for line in data_bits]
        self.module_size = module_size
        self.width = len(self.data_bits[0]) * module_size
        self.height = len(self.data_bits) * module_size

    def __getitem__(self, position):
        x, y = position
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("Pixel out of image")
        return self.data_bits[y // self.module_size][x // self.module_size]

    def to_png(self):
        out = BytesIO()
        PngQRImage(self.data_bits, self.module_size).write(out)
        return out.getvalue()

    def to_data_url(self):
        encoded = b64encode(self.to_png()).decode("ascii")
        return "data:image/png;base64," + encoded


def module_size(qr_size, pixel_size):
    """Largest module size in pixels that fits the symbol and quiet zone"""
    size = pixel_size // (qr_size + 2 * MARGIN_WIDTH)
    if size < 1:
        raise ValueError(
            "Pixel size {} is too small for a QR code of {} modules".format(
                pixel_size, qr_size
            )
        )
    return size


def to_raster(data, pixel_size):
    qr = QRCode(data)
    return RasterImage(qr._image_bits(), module_size(qr.size, pixel_size))


def to_data_url(data, pixel_size):
    return to_raster(data, pixel_size).to_data_url()
