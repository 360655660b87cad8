class BitArray:
    """Growable big-endian bit sequence

    Complete bytes are kept in a bytearray, the trailing incomplete byte
    is kept in an integer buffer.
    """
    def __init__(self, b=None):
        self.byte_array = bytearray(b) if b is not None else bytearray()
        self.buffer = 0
        self.buffer_len = 0

    def __len__(self):
        return 8 * len(self.byte_array) + self.buffer_len

    def __getitem__(self, index):
        length = len(self)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError("BitArray index out of range")
        byte_index, bit_index = divmod(index, 8)
        if byte_index == len(self.byte_array):
            return (self.buffer >> (self.buffer_len - 1 - bit_index)) & 1
        return (self.byte_array[byte_index] >> (7 - bit_index)) & 1

    def __iter__(self):
        for byte in self.byte_array:
            for shift in range(7, -1, -1):
                yield (byte >> shift) & 1
        for shift in range(self.buffer_len - 1, -1, -1):
            yield (self.buffer >> shift) & 1

    def extend(self, number, encode_len):
        """Append the lowest encode_len bits of number, most significant first"""
        if number >> encode_len:
            raise ValueError(
                "{} does not fit into {} bits".format(number, encode_len)
            )
        self.buffer = (self.buffer << encode_len) | number
        self.buffer_len += encode_len
        while self.buffer_len >= 8:
            self.buffer_len -= 8
            self.byte_array.append(self.buffer >> self.buffer_len)
            self.buffer &= (1 << self.buffer_len) - 1

    def to_bytes(self):
        """Bytes of the sequence, the last byte padded with zero bits"""
        if self.buffer_len > 0:
            b = self.buffer << (8 - self.buffer_len)
            return bytes(self.byte_array) + bytes((b,))
        return bytes(self.byte_array)
