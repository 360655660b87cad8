"""Reading module matrices back into their content

Only symbols this package can produce are understood: versions 1
through 13, error correction level M and a single byte segment.
"""
import logging

from .bch import match_format, match_version
from .bitarray import BitArray
from .errors import DecodeError
from .matrix import ModuleMatrix, format_positions, mask_functions, version_positions
from .qrcode import BYTE_MODE
from .reedsolomon import ReedSolomonDecoder
from .tables import (
    MAX_VERSION, MIN_VERSION, block_groups, char_count_bits, ecc_per_block,
    total_codewords
)


logger = logging.getLogger(__name__)

MAX_BCH_ERRORS = 3


def _rows(matrix):
    if isinstance(matrix, ModuleMatrix):
        return matrix.modules
    return [list(row) for row in matrix]


def _read_bits(rows, positions):
    bits = 0
    for i, (row, col) in enumerate(positions):
        bits |= (rows[row][col] & 1) << i
    return bits


def version_from_size(size):
    version, remainder = divmod(size - 17, 4)
    if remainder or not MIN_VERSION <= version <= MAX_VERSION:
        raise DecodeError("Unsupported matrix size {}".format(size))
    return version


def read_format_information(matrix):
    """Error correction level and mask of both format copies

    :return:    List of two (distance, ec_level, mask) tuples
    """
    rows = _rows(matrix)
    return [
        match_format(_read_bits(rows, positions))
        for positions in format_positions(len(rows))
    ]


def read_version_information(matrix):
    """Version encoded in both version blocks, version 7 and above

    :return:    List of two (distance, version) tuples
    """
    rows = _rows(matrix)
    return [
        match_version(_read_bits(rows, positions))
        for positions in version_positions(len(rows))
    ]


def _select_format(matrix):
    copies = read_format_information(matrix)
    if copies[0][1:] != copies[1][1:]:
        logger.warning("Format information copies disagree: %s", copies)
    distance, ec_level, mask = min(copies)
    if distance > MAX_BCH_ERRORS:
        raise DecodeError("Format information is unreadable")
    if ec_level != "M":
        raise DecodeError(
            "Unsupported error correction level {!r}".format(ec_level)
        )
    return mask


def _check_version(matrix, version):
    if version < 7:
        return
    distance, read_version = min(read_version_information(matrix))
    if distance > MAX_BCH_ERRORS:
        raise DecodeError("Version information is unreadable")
    if read_version != version:
        raise DecodeError(
            "Version information {} does not match matrix size of "
            "version {}".format(read_version, version)
        )


def extract_codewords(matrix, version, mask):
    rows = _rows(matrix)
    layout = ModuleMatrix(version)
    layout.mark_function_patterns()
    fn = mask_functions[mask]
    bits = BitArray()
    for row, col in layout.data_positions():
        bit = rows[row][col] & 1
        if fn(row, col) == 0:
            bit ^= 1
        bits.extend(bit, 1)
    return bits.to_bytes()[:total_codewords(version)]


def uninterleave(codewords, version):
    """Split codewords into blocks of data followed by their ecc"""
    sizes = [
        size
        for count, size in block_groups(version)
        for _ in range(count)
    ]
    ec_len = ecc_per_block(version)
    data_blocks = [bytearray() for _ in sizes]
    index = 0
    for i in range(max(sizes)):
        for block, size in zip(data_blocks, sizes):
            if i < size:
                block.append(codewords[index])
                index += 1
    ec_blocks = [bytearray() for _ in sizes]
    for i in range(ec_len):
        for block in ec_blocks:
            block.append(codewords[index])
            index += 1
    return [bytes(d + e) for d, e in zip(data_blocks, ec_blocks)]


def correct_blocks(blocks, version):
    decoder = ReedSolomonDecoder(ecc_per_block(version))
    data = b""
    for index, block in enumerate(blocks):
        corrected = decoder.decode_block(block)
        if corrected is None:
            raise DecodeError("Block {} is uncorrectable".format(index))
        data += corrected
    return data


def parse_segment(data, version):
    value = int.from_bytes(data, "big")
    total = 8 * len(data)
    position = 0

    def read(length):
        nonlocal position
        if position + length > total:
            raise DecodeError("Segment runs past the data codewords")
        position += length
        return (value >> (total - position)) & ((1 << length) - 1)

    mode = read(4)
    if mode != BYTE_MODE:
        raise DecodeError("Unsupported segment mode {:04b}".format(mode))
    length = read(char_count_bits(version))
    return bytes(read(8) for _ in range(length))


def decode(matrix):
    """Content of a fully resolved module matrix"""
    rows = _rows(matrix)
    size = len(rows)
    if any(len(row) != size for row in rows):
        raise DecodeError("Module matrix is not square")
    version = version_from_size(size)
    mask = _select_format(rows)
    _check_version(rows, version)
    codewords = extract_codewords(rows, version, mask)
    blocks = uninterleave(codewords, version)
    data = correct_blocks(blocks, version)
    return parse_segment(data, version)
