from .galoisfield import modulo_gf2


FORMAT_GENERATOR = 0b10100110111
FORMAT_MASK = 0b101010000010010
VERSION_GENERATOR = 0x1F25

ec_level_code = {
    "L": 0b01,
    "M": 0b00,
    "Q": 0b11,
    "H": 0b10
}

# Format words for level M indexed by mask, BCH(15,5) encoded and masked
FORMAT_INFORMATION = (
    0x5412, 0x5125, 0x5E7C, 0x5B4B,
    0x45F9, 0x40CE, 0x4F97, 0x4AA0
)


def format_string(ec_level, mask):
    ec_code = ec_level_code[ec_level]
    format_bits = (ec_code << 13) | (mask << 10)
    format_ec_bits = modulo_gf2(format_bits, FORMAT_GENERATOR)
    format_s = format_bits | format_ec_bits
    format_s ^= FORMAT_MASK
    return format_s


def version_string(version):
    remainder = version
    for _ in range(12):
        remainder = (remainder << 1) ^ ((remainder >> 11) * VERSION_GENERATOR)
    return (version << 12) | remainder


def hamming_distance(a, b):
    return bin(a ^ b).count("1")


def match_format(bits):
    """Nearest valid format word to bits

    :return:    Tuple (distance, ec_level, mask)
    """
    return min(
        (hamming_distance(bits, format_string(ec_level, mask)), ec_level, mask)
        for ec_level in ec_level_code
        for mask in range(8)
    )


def match_version(bits, versions=range(7, 41)):
    """Nearest valid version word to bits

    :return:    Tuple (distance, version)
    """
    return min(
        (hamming_distance(bits, version_string(version)), version)
        for version in versions
    )
