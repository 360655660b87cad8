# module state:
# implemented:
#       - QR codes version 1 through 13
#       - error correction level M
#       - byte encoding
# not implemented:
#       - numeric, alphanumeric and kanji encodings
#       - error correction levels L, Q and H
#       - splitting content of QR code into multiple QR codes

import logging
from itertools import zip_longest

from .bitarray import BitArray
from .errors import DataTooLongError
from .matrix import ModuleMatrix
from .penalty import penalty
from .reedsolomon import encode_block
from .tables import (
    MAX_VERSION, MIN_VERSION, block_groups, char_count_bits, data_codewords,
    ecc_per_block
)


logger = logging.getLogger(__name__)

MARGIN_WIDTH = 4
BYTE_MODE = 0b0100
PAD_CODEWORDS = (0xEC, 0x11)


def to_bytes(data):
    """Content as bytes, text is ISO 8859-1 encoded when possible"""
    if isinstance(data, str):
        try:
            return data.encode("iso 8859-1")
        except UnicodeEncodeError:
            return data.encode("utf-8")
    try:
        return bytes(memoryview(data))
    except TypeError:
        raise TypeError(
            "Data must be str or a bytes-like object, got {}".format(
                type(data).__name__
            )
        ) from None


def capacity(version):
    """Largest number of bytes that fits into version"""
    header_bits = 4 + char_count_bits(version)
    return (8 * data_codewords(version) - header_bits) // 8


def select_version(length):
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        needed = 4 + char_count_bits(version) + 8 * length
        if needed <= 8 * data_codewords(version):
            return version
    raise DataTooLongError(length, capacity(MAX_VERSION))


def encode(data, version):
    """Data codewords: mode, character count, data, terminator, padding"""
    capacity_bits = 8 * data_codewords(version)
    bits = BitArray()
    bits.extend(BYTE_MODE, 4)
    bits.extend(len(data), char_count_bits(version))
    for byte in data:
        bits.extend(byte, 8)
    zeroes = min(4, capacity_bits - len(bits))
    bits.extend(0, zeroes)
    encoded = bits.to_bytes()
    pad_bytes = data_codewords(version) - len(encoded)
    encoded += bytes(PAD_CODEWORDS[i & 1] for i in range(pad_bytes))
    return encoded


def split_blocks(encoded_data, version):
    data_blocks = []
    start = 0
    for count, size in block_groups(version):
        for _ in range(count):
            data_blocks.append(encoded_data[start:start + size])
            start += size
    return data_blocks


def correction_encode(encoded_data, version):
    data_blocks = split_blocks(encoded_data, version)
    ec_len = ecc_per_block(version)
    ec_blocks = [encode_block(block, ec_len) for block in data_blocks]
    return (data_blocks, ec_blocks)


def blocks_iterator(blocks):
    for vals in zip_longest(*blocks):
        for val in vals:
            if val is not None:
                yield val


def interleave_blocks(blocks):
    return bytes(blocks_iterator(blocks))


def interleave(encoded_data, version):
    """Final codeword sequence: interleaved data, then interleaved ecc"""
    data_blocks, ec_blocks = correction_encode(encoded_data, version)
    return interleave_blocks(data_blocks) + interleave_blocks(ec_blocks)


class QRCode:
    """QR code symbol at error correction level M

    All eight masks are evaluated, the first one with the lowest penalty
    score is kept unless a mask is forced.
    """
    def __init__(self, data, mask=None):
        if mask is not None and mask not in range(8):
            raise ValueError("Mask index must be 0 to 7, got {!r}".format(mask))
        self.data = to_bytes(data)
        self.version = select_version(len(self.data))
        logger.debug(
            "Selected version %d for %d bytes", self.version, len(self.data)
        )
        encoded_data = encode(self.data, self.version)
        self.codewords = interleave(encoded_data, self.version)
        base = ModuleMatrix(self.version)
        base.mark_function_patterns()
        base.mark_bits(BitArray(self.codewords))
        self.penalty_scores = []
        self.matrix = None
        for mask_index in range(8):
            candidate = base.copy()
            candidate.mask(mask_index)
            candidate.mark_format_information(mask_index)
            candidate.penalty_score = penalty(candidate.modules)
            self.penalty_scores.append(candidate.penalty_score)
            logger.debug(
                "Mask %d penalty score %d", mask_index, candidate.penalty_score
            )
            if mask is None:
                if self.matrix is None or \
                   candidate.penalty_score < self.matrix.penalty_score:
                    self.matrix = candidate
            elif mask == mask_index:
                self.matrix = candidate
        logger.debug("Selected mask %d", self.matrix.mask_index)

    @property
    def size(self):
        return self.matrix.size

    @property
    def mask_index(self):
        return self.matrix.mask_index

    @property
    def penalty_score(self):
        return self.matrix.penalty_score

    def __getitem__(self, position):
        return self.matrix[position]

    def _image_bits(self):
        """Module rows surrounded by the light quiet zone"""
        width = self.size + 2 * MARGIN_WIDTH
        margin = [[0] * width for _ in range(MARGIN_WIDTH)]
        side = [0] * MARGIN_WIDTH
        lines = [side + row + side for row in self.matrix.rows()]
        return margin + lines + [list(line) for line in margin]

    @classmethod
    def image_bits(cls, data, mask=None):
        qr = cls(data, mask)
        return qr._image_bits()


def generate(data):
    """Final module matrix for data, see QRCode"""
    return QRCode(data).matrix
