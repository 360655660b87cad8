from .bch import FORMAT_INFORMATION, version_string
from .tables import alignments, matrix_size


DARK = 1
LIGHT = 0

# A mask applies to a module where its function returns zero
mask_functions = [
    lambda row, col: (row ^ col) & 1,
    lambda row, col: row & 1,
    lambda row, col: col % 3,
    lambda row, col: (row + col) % 3,
    lambda row, col: (row // 2 ^ col // 3) & 1,
    lambda row, col: (row * col) % 6,
    lambda row, col: ((row * col) % 2 + (row * col) % 3) & 1,
    lambda row, col: (((row + col) & 1) + (row * col) % 3) & 1
]


def format_positions(size):
    """Module positions of format bits 0..14 for both copies

    :return:    Tuple of two lists of (row, col), index is the bit index
    """
    first = [(i, 8) for i in range(6)]
    first += [(7, 8), (8, 8), (8, 7)]
    first += [(8, 5 - i) for i in range(6)]
    second = [(8, size - 1 - i) for i in range(8)]
    second += [(size - 7 + i, 8) for i in range(7)]
    return first, second


def version_positions(size):
    """Module positions of version bits 0..17 for both copies"""
    first = [(i // 3, size - 11 + i % 3) for i in range(18)]
    second = [(col, row) for row, col in first]
    return first, second


class ModuleMatrix:
    """Grid of modules of one QR code symbol

    Modules are DARK, LIGHT or None while unset. Reserved modules belong
    to function patterns or format and version areas, data placement
    and masking never touch them.
    """
    def __init__(self, version):
        self.version = version
        self.size = matrix_size(version)
        self.modules = [[None] * self.size for _ in range(self.size)]
        self.reserved = [[False] * self.size for _ in range(self.size)]
        self.mask_index = None
        self.penalty_score = None

    def __getitem__(self, position):
        row, col = position
        return self.modules[row][col]

    def __eq__(self, other):
        if not isinstance(other, ModuleMatrix):
            return NotImplemented
        return self.version == other.version and self.modules == other.modules

    def __repr__(self):
        return "ModuleMatrix(version={}, mask_index={})".format(
            self.version, self.mask_index
        )

    def rows(self):
        return [list(row) for row in self.modules]

    def copy(self):
        matrix = ModuleMatrix(self.version)
        matrix.modules = self.rows()
        matrix.reserved = [list(row) for row in self.reserved]
        matrix.mask_index = self.mask_index
        matrix.penalty_score = self.penalty_score
        return matrix

    def set_function_module(self, row, col, bit):
        self.modules[row][col] = bit
        self.reserved[row][col] = True

    def mark_finder_pattern(self, row, col):
        # 7x7 pattern and its light separator, clipped to the grid
        for r in range(-1, 8):
            for c in range(-1, 8):
                y = row + r
                x = col + c
                if not (0 <= y < self.size and 0 <= x < self.size):
                    continue
                distance = max(abs(r - 3), abs(c - 3))
                bit = DARK if distance in (0, 1, 3) else LIGHT
                self.set_function_module(y, x, bit)

    def mark_finder_patterns(self):
        self.mark_finder_pattern(0, 0)
        self.mark_finder_pattern(0, self.size - 7)
        self.mark_finder_pattern(self.size - 7, 0)

    def mark_alignment_pattern(self, row, col):
        for r in range(-2, 3):
            for c in range(-2, 3):
                if self.reserved[row + r][col + c]:
                    # overlaps a finder pattern
                    return
        for r in range(-2, 3):
            for c in range(-2, 3):
                distance = max(abs(r), abs(c))
                bit = LIGHT if distance == 1 else DARK
                self.set_function_module(row + r, col + c, bit)

    def mark_alignment_patterns(self):
        positions = alignments[self.version - 1]
        for row in positions:
            for col in positions:
                self.mark_alignment_pattern(row, col)

    def mark_timing_patterns(self):
        for i in range(8, self.size - 8):
            bit = DARK if i % 2 == 0 else LIGHT
            if not self.reserved[6][i]:
                self.set_function_module(6, i, bit)
            if not self.reserved[i][6]:
                self.set_function_module(i, 6, bit)

    def reserve_format_information_area(self):
        first, second = format_positions(self.size)
        for row, col in first + second:
            self.reserved[row][col] = True
        # dark module
        self.set_function_module(self.size - 8, 8, DARK)

    def mark_version_information(self):
        if self.version < 7:
            return
        version_s = version_string(self.version)
        for positions in version_positions(self.size):
            for i, (row, col) in enumerate(positions):
                self.set_function_module(row, col, (version_s >> i) & 1)

    def mark_function_patterns(self):
        self.mark_finder_patterns()
        self.mark_alignment_patterns()
        self.mark_timing_patterns()
        self.reserve_format_information_area()
        self.mark_version_information()

    def data_positions(self):
        """Yield (row, col) of every unreserved module in placement order

        Column pairs are walked from the right edge, upwards first, with
        the vertical timing column skipped.
        """
        upward = True
        col = self.size - 1
        while col > 0:
            if col == 6:
                col = 5
            if upward:
                rows = range(self.size - 1, -1, -1)
            else:
                rows = range(self.size)
            for row in rows:
                for x in (col, col - 1):
                    if not self.reserved[row][x]:
                        yield (row, x)
            upward = not upward
            col -= 2

    def mark_bits(self, bits):
        bits = iter(bits)
        for row, col in self.data_positions():
            # remainder modules stay light
            self.modules[row][col] = next(bits, LIGHT)

    def mask(self, index):
        fn = mask_functions[index]
        for row in range(self.size):
            for col in range(self.size):
                if not self.reserved[row][col] and fn(row, col) == 0:
                    self.modules[row][col] ^= 1

    def mark_format_information(self, mask_index):
        format_s = FORMAT_INFORMATION[mask_index]
        for positions in format_positions(self.size):
            for i, (row, col) in enumerate(positions):
                self.modules[row][col] = (format_s >> i) & 1
        self.mask_index = mask_index
