from abc import ABC, abstractmethod


class QRImage(ABC):
    """Abstract class representing image of a QR code

    Modules are given as rows of bits, 1 for dark module, quiet zone
    already included. Every module is drawn as a square of scale pixels.
    """
    file_open_mode = "wb"
    DEFAULT_SCALE = 8

    def __init__(self, data_bits, scale=None):
        self.data_bits = [list(line) for line in data_bits]
        self.scale = self.DEFAULT_SCALE if scale is None else scale
        if self.scale < 1:
            raise ValueError(
                "Scale must be a positive number of pixels, got {}".format(
                    self.scale
                )
            )

    @property
    def image_height(self):
        """Total image height in pixels"""
        return len(self.data_bits) * self.scale

    @property
    def image_width(self):
        """Total image width in pixels"""
        return len(self.data_bits[0]) * self.scale

    @abstractmethod
    def _write_header(self, image_file):
        pass

    @abstractmethod
    def _write_squares(self, image_file):
        pass

    @abstractmethod
    def _write_finish(self, image_file):
        pass

    def write(self, image_file):
        for step in (self._write_header, self._write_squares,
                     self._write_finish):
            step(image_file)
