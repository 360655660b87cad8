# Structural tables for error correction level M, versions 1 through 13

MIN_VERSION = 1
MAX_VERSION = 13

# (ecc codewords per block, group 1 block count, group 1 data codewords
#  per block[, group 2 block count, group 2 data codewords per block])
blocks = (
    (10, 1, 16),            # 1
    (16, 1, 28),            # 2
    (26, 1, 44),            # 3
    (18, 2, 32),            # 4
    (24, 2, 43),            # 5
    (16, 4, 27),            # 6
    (18, 4, 31),            # 7
    (22, 2, 38, 2, 39),     # 8
    (22, 3, 36, 2, 37),     # 9
    (26, 4, 43, 1, 44),     # 10
    (30, 1, 50, 4, 51),     # 11
    (22, 6, 36, 2, 37),     # 12
    (22, 8, 37, 1, 38),     # 13
)

alignments = (
    (),               # 1
    (6, 18),          # 2
    (6, 22),          # 3
    (6, 26),          # 4
    (6, 30),          # 5
    (6, 34),          # 6
    (6, 22, 38),      # 7
    (6, 24, 42),      # 8
    (6, 26, 46),      # 9
    (6, 28, 50),      # 10
    (6, 30, 54),      # 11
    (6, 32, 58),      # 12
    (6, 34, 62),      # 13
)

# Bits left over after the last codeword, filled with light modules
remainder_bits = (0, 7, 7, 7, 7, 7, 0, 0, 0, 0, 0, 0, 0)


def block_groups(version):
    """List of (block count, data codewords per block) for version"""
    format_ = blocks[version - 1]
    groups = (len(format_) - 1) // 2
    return [
        (format_[2 * group + 1], format_[2 * group + 2])
        for group in range(groups)
    ]


def ecc_per_block(version):
    return blocks[version - 1][0]


def block_count(version):
    return sum(count for count, _ in block_groups(version))


def data_codewords(version):
    return sum(count * size for count, size in block_groups(version))


def total_codewords(version):
    return data_codewords(version) + block_count(version) * ecc_per_block(version)


def char_count_bits(version):
    return 8 if version <= 9 else 16


def matrix_size(version):
    return 17 + 4 * version
