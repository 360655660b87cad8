from .image import QRImage


def le(value, size=4):
    return (value & ((1 << 8 * size) - 1)).to_bytes(size, "little")


class BmpQRImage(QRImage):
    """Indexed 1 bit BMP with a two entry palette, black then white"""
    BITS_PER_PIXEL = 1
    PALETTE = (0x000000, 0xFFFFFF)
    FILE_HEADER_SIZE = 14
    DIB_HEADER_SIZE = 40
    PIXELS_PER_METER = 2835  # 72 dpi

    @classmethod
    def _padded_width(cls, width, bits_per_pixel):
        """Size of one pixel row in bytes, rows are aligned to 4 bytes

        :param int width:           Number of pixels in row
        :param int bits_per_pixel:  Pixel size in bits
        """
        row_bytes = (width * bits_per_pixel + 7) // 8
        return row_bytes + (-row_bytes % 4)

    @classmethod
    def header(cls, width, height, bits_per_pixel):
        """File header, BITMAPINFOHEADER and palette for an image

        :param int width:           Width of image in pixels
        :param int height:          Height of image in pixels
        :param int bits_per_pixel:  Pixel size in bits
        :return:                    Bytes preceding the pixel data"""
        offset = cls.FILE_HEADER_SIZE + cls.DIB_HEADER_SIZE \
            + 4 * len(cls.PALETTE)
        pixel_bytes = height * cls._padded_width(width, bits_per_pixel)
        fields = (
            (offset + pixel_bytes, 4),
            (0, 4),  # reserved
            (offset, 4),
            (cls.DIB_HEADER_SIZE, 4),
            (width, 4),
            # negative height stores rows top to bottom
            (-height, 4),
            (1, 2),  # color planes
            (bits_per_pixel, 2),
            (0, 4),  # no compression
            (pixel_bytes, 4),
            (cls.PIXELS_PER_METER, 4),
            (cls.PIXELS_PER_METER, 4),
            (len(cls.PALETTE), 4),
            (0, 4),  # all colors are important
        )
        return b"BM" + b"".join(le(value, size) for value, size in fields) \
            + b"".join(le(color) for color in cls.PALETTE)

    @classmethod
    def encode_line(cls, squares, scale):
        """Encodes single pixel row, padding included

        :param Iterable[int] squares:   Bits of the module row, 1 for dark
        :param int scale:               Module size in pixels
        """
        squares = list(squares)
        width = len(squares) * scale
        padded = cls._padded_width(width, cls.BITS_PER_PIXEL)
        light = (1 << scale) - 1
        value = 0
        for bit in squares:
            # palette index 1 is white
            value = (value << scale) | (0 if bit else light)
        return (value << (8 * padded - width)).to_bytes(padded, "big")

    def _write_header(self, image_file):
        image_file.write(
            self.header(self.image_width, self.image_height, self.BITS_PER_PIXEL)
        )

    def _write_squares(self, image_file):
        for raw_line in self.data_bits:
            image_file.write(self.encode_line(raw_line, self.scale) * self.scale)

    def _write_finish(self, image_file):
        pass
