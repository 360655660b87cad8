from zlib import compress, crc32

from .image import QRImage


def encode_int(i, size=4):
    return i.to_bytes(size, "big")


def chunk(type_, payload):
    """Length, type, payload and CRC of the type and payload"""
    type_and_payload = type_ + payload
    return encode_int(len(payload)) + type_and_payload \
        + encode_int(crc32(type_and_payload))


class PngQRImage(QRImage):
    """1 bit greyscale PNG, palette-free with black as zero"""
    HEADER = b"\x89PNG\r\n\x1a\x0a"
    BIT_DEPTH = 1
    GREYSCALE = 0
    # filter types
    FILTER_NONE = 0
    FILTER_UP = 2

    @classmethod
    def encode_line(cls, squares, scale=1):
        """Pack one row of modules into 1 bit pixels, padded to a byte"""
        light = (1 << scale) - 1
        value = 0
        length = 0
        for square in squares:
            value = (value << scale) | (0 if square else light)
            length += scale
        padding = -length % 8
        return (value << padding).to_bytes((length + padding) // 8, "big")

    def scanlines(self):
        """Filtered pixel rows, one module row at a time

        Pixel rows repeating the one above are written with the up filter
        and all-zero differences, which compresses to almost nothing.
        """
        for line in self.data_bits:
            encoded_line = self.encode_line(line, self.scale)
            yield bytes((self.FILTER_NONE,)) + encoded_line
            repeated = bytes((self.FILTER_UP,)) + bytes(len(encoded_line))
            for _ in range(self.scale - 1):
                yield repeated

    def _write_header(self, image_file):
        image_file.write(self.HEADER)
        ihdr = b"".join((
            encode_int(self.image_width),
            encode_int(self.image_height),
            encode_int(self.BIT_DEPTH, 1),
            encode_int(self.GREYSCALE, 1),
            encode_int(0, 1),  # deflate
            encode_int(0, 1),  # adaptive filtering
            encode_int(0, 1),  # no interlace
        ))
        image_file.write(chunk(b"IHDR", ihdr))

    def _write_squares(self, image_file):
        image_file.write(chunk(b"IDAT", compress(b"".join(self.scanlines()))))

    def _write_finish(self, image_file):
        image_file.write(chunk(b"IEND", b""))
