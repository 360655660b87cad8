import logging
import random
import string

import pytest
import qrcode
from qrcode.util import MODE_8BIT_BYTE, QRData

from squares import DataTooLongError, QRCode, generate
from squares.qrcode.bch import (
    FORMAT_INFORMATION, format_string, match_format, version_string
)
from squares.qrcode.bitarray import BitArray
from squares.qrcode.matrix import ModuleMatrix, mask_functions
from squares.qrcode.penalty import (
    penalty, penalty_balance, penalty_blocks, penalty_finder_like,
    penalty_runs
)
from squares.qrcode.qrcode import (
    capacity, correction_encode, encode, interleave, interleave_blocks,
    select_version, to_bytes
)
from squares.qrcode.reader import read_format_information, read_version_information
from squares.qrcode.tables import (
    data_codewords, ecc_per_block, remainder_bits, total_codewords
)


GOLDEN_TEXT = "HTTPS://EXAMPLE/J/ABC123"
GOLDEN_DATA = [65, 132, 133, 69, 69, 5, 51, 162, 242, 244, 85, 132, 20, 213,
               4, 196, 82, 244, 162, 244, 20, 36, 51, 19, 35, 48, 236, 17]
GOLDEN_ECC = [13, 178, 149, 180, 37, 242, 203, 5, 135, 66, 219, 232, 201,
              177, 54, 51]
GOLDEN_PENALTIES = [583, 414, 471, 577, 435, 585, 532, 772]
GOLDEN_MATRIX = [
    "1111111010010010101111111",
    "1000001001001110001000001",
    "1011101011011100101011101",
    "1011101000110011001011101",
    "1011101001101111001011101",
    "1000001011001000101000001",
    "1111111010101010101111111",
    "0000000000010011100000000",
    "1010001101000100100100101",
    "0011110101101001010101010",
    "0110001000001011010011101",
    "0110100010100000100101000",
    "0110111010110101101110101",
    "0100100101000000100100010",
    "1110101111010011111001101",
    "0010100011000010110111000",
    "1100111100111010111110110",
    "0000000010101010100010000",
    "1111111011101111101010001",
    "1000001000011011100010000",
    "1011101001001011111110010",
    "1011101001100010010010110",
    "1011101011110011111111011",
    "1000001000010001011110000",
    "1111111010010010101001001",
]

CAPACITIES = [14, 26, 42, 62, 84, 106, 122, 152, 180, 213, 251, 287, 331]

FINDER = [
    [1, 1, 1, 1, 1, 1, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 1, 1, 1, 1, 1, 1],
]


def random_text(rng, length):
    return "".join(rng.choice(string.printable[:95]) for _ in range(length))


def test_bitarray():
    bits = BitArray()
    bits.extend(0b0100, 4)
    bits.extend(24, 8)
    bits.extend(0, 3)
    assert len(bits) == 15
    assert list(bits)[:12] == [0, 1, 0, 0, 0, 0, 0, 1, 1, 0, 0, 0]
    assert bits[5] == 0 and bits[7] == 1 and bits[-1] == 0
    assert bits.to_bytes() == bytes([0b01000001, 0b10000000])
    with pytest.raises(ValueError):
        bits.extend(16, 4)
    with pytest.raises(IndexError):
        bits[15]


def test_to_bytes():
    assert to_bytes(b"abc") == b"abc"
    assert to_bytes(bytearray(b"abc")) == b"abc"
    assert to_bytes("caf\xe9") == b"caf\xe9"
    assert to_bytes("€") == "€".encode("utf-8")
    assert to_bytes(memoryview(b"abc")) == b"abc"
    with pytest.raises(TypeError):
        to_bytes(42)
    with pytest.raises(TypeError):
        QRCode(None)


def test_tables():
    totals = [26, 44, 70, 100, 134, 172, 196, 242, 292, 346, 404, 466, 532]
    for version, total in enumerate(totals, 1):
        assert total_codewords(version) == total
    assert data_codewords(13) == 334
    assert ecc_per_block(13) == 22


@pytest.mark.parametrize("version", range(1, 14))
def test_version_boundaries(version):
    assert capacity(version) == CAPACITIES[version - 1]
    assert select_version(CAPACITIES[version - 1]) == version
    if version < 13:
        assert select_version(CAPACITIES[version - 1] + 1) == version + 1
    else:
        with pytest.raises(DataTooLongError):
            select_version(CAPACITIES[version - 1] + 1)


def test_data_too_long():
    with pytest.raises(DataTooLongError) as excinfo:
        generate("a" * 332)
    assert excinfo.value.length == 332
    assert excinfo.value.limit == 331
    assert isinstance(excinfo.value, ValueError)
    with pytest.raises(DataTooLongError):
        QRCode(b"\x00" * 1000)


def test_encode_golden():
    encoded = encode(GOLDEN_TEXT.encode("ascii"), 2)
    assert list(encoded) == GOLDEN_DATA


def test_encode_padding():
    encoded = encode(b"", 1)
    assert len(encoded) == 16
    # mode 0100, count 00000000, terminator 0000
    assert encoded[:2] == bytes([0b01000000, 0b00000000])
    assert list(encoded[2:6]) == [0xEC, 0x11, 0xEC, 0x11]


def test_encode_short_terminator():
    # 14 bytes leave exactly 4 free bits in version 1
    encoded = encode(b"x" * 14, 1)
    assert len(encoded) == 16
    assert encoded[-1] == 0x80
    encoded = encode(b"x" * 26, 2)
    assert len(encoded) == 28
    assert encoded[-1] == 0x80


def test_interleave_golden():
    codewords = interleave(bytes(GOLDEN_DATA), 2)
    assert list(codewords) == GOLDEN_DATA + GOLDEN_ECC


def test_interleave_two_groups():
    data = bytes(range(154))
    data_blocks, ec_blocks = correction_encode(data, 8)
    assert [len(block) for block in data_blocks] == [38, 38, 39, 39]
    assert all(len(block) == 22 for block in ec_blocks)
    codewords = interleave(data, 8)
    assert len(codewords) == total_codewords(8)
    assert list(codewords[:8]) == [0, 38, 76, 115, 1, 39, 77, 116]
    # last data column only exists in the longer blocks
    assert list(codewords[148:154]) == [37, 75, 113, 152, 114, 153]
    assert codewords[154:158] == bytes(block[0] for block in ec_blocks)


def test_interleave_blocks():
    assert interleave_blocks([b"\x01\x02", b"\x03\x04\x05"]) == b"\x01\x03\x02\x04\x05"


def test_format_strings():
    for mask in range(8):
        assert FORMAT_INFORMATION[mask] == format_string("M", mask)
        assert match_format(FORMAT_INFORMATION[mask]) == (0, "M", mask)
    assert format_string("L", 4) == 0b110011000101111
    # three flipped bits are still recovered
    assert match_format(FORMAT_INFORMATION[5] ^ 0b100000100000001)[1:] == ("M", 5)


def test_version_strings():
    assert version_string(7) == 0x07C94
    assert version_string(8) == 0x085BC
    assert version_string(13) == 0x0D847


def test_mask_functions():
    expected = [
        lambda r, c: (r + c) % 2 == 0,
        lambda r, c: r % 2 == 0,
        lambda r, c: c % 3 == 0,
        lambda r, c: (r + c) % 3 == 0,
        lambda r, c: (r // 2 + c // 3) % 2 == 0,
        lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
        lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
        lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
    ]
    for fn, reference in zip(mask_functions, expected):
        for row in range(12):
            for col in range(12):
                assert (fn(row, col) == 0) == reference(row, col)


@pytest.mark.parametrize("version", range(1, 14))
def test_function_patterns(version):
    matrix = ModuleMatrix(version)
    matrix.mark_function_patterns()
    size = matrix.size
    assert size == 17 + 4 * version
    free = sum(not cell for row in matrix.reserved for cell in row)
    assert free == 8 * total_codewords(version) + remainder_bits[version - 1]
    assert len(list(matrix.data_positions())) == free
    assert matrix[size - 8, 8] == 1
    for row, col in ((0, 0), (0, size - 7), (size - 7, 0)):
        for r in range(7):
            for c in range(7):
                assert matrix[row + r, col + c] == FINDER[r][c]


def test_alignment_pattern_version_2():
    matrix = ModuleMatrix(2)
    matrix.mark_function_patterns()
    assert matrix[18, 18] == 1
    assert matrix[17, 18] == 0
    assert matrix[16, 16] == 1 and matrix[20, 20] == 1
    assert all(matrix.reserved[r][c] for r in range(16, 21) for c in range(16, 21))


def test_alignment_patterns_version_7():
    matrix = ModuleMatrix(7)
    matrix.mark_function_patterns()
    centers = [(6, 22), (22, 6), (22, 22), (22, 38), (38, 22), (38, 38)]
    for row, col in centers:
        assert matrix[row, col] == 1
        assert matrix[row - 1, col] == 0
        assert matrix[row - 2, col - 2] == 1
    # overlaps a finder pattern, not placed
    assert matrix[38, 6] == 1 and not matrix.reserved[36][8]


def test_data_positions_order():
    matrix = ModuleMatrix(1)
    matrix.mark_function_patterns()
    positions = list(matrix.data_positions())
    assert positions[:4] == [(20, 20), (20, 19), (19, 20), (19, 19)]
    assert positions[-1] == (12, 0)
    assert all(col != 6 for _, col in positions)


def test_penalty_rules():
    rows = [[0] * 6 for _ in range(6)]
    assert penalty_runs(rows) == 2 * 6 * 4
    assert penalty_blocks(rows) == 3 * 25
    assert penalty_finder_like(rows) == 0
    assert penalty_balance(rows) == 90
    checker = [[(r + c) & 1 for c in range(10)] for r in range(10)]
    assert penalty_runs(checker) == 0
    assert penalty_blocks(checker) == 0
    assert penalty_balance(checker) == 0
    line = [1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1]
    assert penalty_finder_like([line]) == 80


def test_penalty_balance_steps():
    def balance(dark, total=100):
        return penalty_balance([[1] * dark + [0] * (total - dark)])
    assert balance(50) == 0
    assert balance(54) == 0
    assert balance(55) == 10
    assert balance(45) == 0
    assert balance(44) == 10
    assert balance(0) == 90
    assert balance(100) == 100


def test_golden():
    qr = QRCode(GOLDEN_TEXT)
    assert qr.version == 2
    assert qr.size == 25
    assert qr.penalty_scores == GOLDEN_PENALTIES
    assert qr.mask_index == 1
    assert qr.penalty_score == 414
    assert ["".join(map(str, row)) for row in qr.matrix.rows()] == GOLDEN_MATRIX


def test_golden_version_8():
    qr = QRCode("x" * 130)
    assert qr.version == 8
    assert qr.mask_index == 2
    assert qr.penalty_scores == [1254, 1652, 1235, 1993, 2053, 1384, 1597, 1972]


def test_mask_optimality():
    rng = random.Random(18004)
    for length in (0, 5, 30, 100, 200, 331):
        qr = QRCode(random_text(rng, length))
        assert len(qr.penalty_scores) == 8
        assert qr.penalty_score == min(qr.penalty_scores)
        assert qr.mask_index == qr.penalty_scores.index(qr.penalty_score)
        for mask in range(8):
            forced = QRCode(qr.data, mask)
            assert forced.mask_index == mask
            assert forced.penalty_score == qr.penalty_scores[mask]
            assert penalty(forced.matrix.rows()) == forced.penalty_score


def test_invalid_mask():
    with pytest.raises(ValueError):
        QRCode("abc", 8)


def test_determinism():
    assert generate(GOLDEN_TEXT) == generate(GOLDEN_TEXT)
    assert generate(GOLDEN_TEXT) == generate(GOLDEN_TEXT.encode("ascii"))
    assert generate("a") != generate("b")


@pytest.mark.parametrize("length", [0, 1, 14, 15, 60, 122, 123, 200, 331])
def test_structure(length):
    matrix = generate(random_text(random.Random(length), length))
    size = matrix.size
    rows = matrix.rows()
    assert all(cell in (0, 1) for row in rows for cell in row)
    for row, col in ((0, 0), (0, size - 7), (size - 7, 0)):
        for r in range(7):
            assert rows[row + r][col:col + 7] == FINDER[r]
    assert matrix[size - 8, 8] == 1
    for i in range(8, size - 8):
        assert matrix[6, i] == 1 - i % 2
        assert matrix[i, 6] == 1 - i % 2
    first, second = read_format_information(matrix)
    assert first == second == (0, "M", matrix.mask_index)
    if matrix.version >= 7:
        assert read_version_information(matrix) == [(0, matrix.version)] * 2


@pytest.mark.parametrize("length", [1, 14, 20, 42, 70, 106, 122, 140, 180, 213,
                                    250, 287, 331])
def test_matches_python_qrcode(length):
    data = random_text(random.Random(length * 7), length).encode("ascii")
    qr = QRCode(data)
    reference = qrcode.QRCode(
        version=qr.version,
        error_correction=qrcode.ERROR_CORRECT_M,
        border=0,
        mask_pattern=qr.mask_index
    )
    reference.add_data(QRData(data, mode=MODE_8BIT_BYTE))
    reference.make(fit=False)
    rows = [[int(bit) for bit in row] for row in reference.get_matrix()]
    assert rows == qr.matrix.rows()


def test_no_zero_codeword_before_padding():
    # 4 + 8 + 8 + 4 bits end on a byte boundary, pad bytes follow directly
    encoded = encode(b"F", 1)
    assert list(encoded[:6]) == [64, 20, 96, 0xEC, 0x11, 0xEC]
    assert 0 not in encoded[3:]


def test_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger="squares"):
        QRCode(GOLDEN_TEXT)
    messages = [record.getMessage() for record in caplog.records]
    assert "Selected version 2 for 24 bytes" in messages
    assert "Mask 1 penalty score 414" in messages
    assert "Selected mask 1" in messages
