class DataTooLongError(ValueError):
    """Content does not fit into the largest supported QR code version"""
    def __init__(self, length, limit):
        super().__init__(
            "Data too long to be encoded to QR code: {} bytes, "
            "at most {} bytes fit".format(length, limit)
        )
        self.length = length
        self.limit = limit


class DecodeError(ValueError):
    """Module matrix could not be read back"""
