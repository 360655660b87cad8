import logging

from .galoisfield import gf256


logger = logging.getLogger(__name__)


def generator_polynomial(degree, gf=gf256):
    """Product of (x - a^i) for i in 0..degree-1, highest coefficient first"""
    g = [1]
    for i in range(degree):
        g = gf.poly_mul(g, (1, gf.exp(i)))
    return g


def encode_block(data, ecc_length, gf=gf256):
    """Error correction codewords of one block

    Data bytes are the high-order coefficients of the message polynomial,
    the returned bytes are the remainder of its division by the generator.
    """
    generator = generator_polynomial(ecc_length, gf)
    remainder = [0] * ecc_length
    for byte in data:
        factor = byte ^ remainder[0]
        remainder = remainder[1:] + [0]
        for j in range(ecc_length):
            remainder[j] ^= gf.mul(generator[j + 1], factor)
    return bytes(remainder)


class ReedSolomonDecoder:
    def __init__(self, ecc_length, gf=gf256):
        self.gf = gf
        self.corrections_len = ecc_length

    def _eval_ascending(self, polynomial, x):
        return self.gf.poly_eval(polynomial[::-1], x)

    def syndromes(self, data):
        return [
            self.gf.poly_eval(data, self.gf.exp(i))
            for i in range(self.corrections_len)
        ]

    def error_locator(self, synd):
        """Berlekamp-Massey, coefficients in ascending order"""
        gf = self.gf
        locator = [1]
        previous = [1]
        errors = 0
        shift = 1
        previous_delta = 1
        for n in range(self.corrections_len):
            delta = synd[n]
            for i in range(1, min(len(locator), n + 1)):
                delta ^= gf.mul(locator[i], synd[n - i])
            if delta == 0:
                shift += 1
                continue
            coeff = gf.div(delta, previous_delta)
            updated = list(locator)
            missing = len(previous) + shift - len(updated)
            if missing > 0:
                updated.extend([0] * missing)
            for i, value in enumerate(previous):
                updated[i + shift] ^= gf.mul(coeff, value)
            if 2 * errors <= n:
                errors = n + 1 - errors
                previous = locator
                previous_delta = delta
                shift = 1
            else:
                shift += 1
            locator = updated
        while len(locator) > 1 and locator[-1] == 0:
            locator.pop()
        return locator, errors

    def find_errors(self, locator, data_len):
        # Chien search, position p holds the coefficient of x^(data_len-1-p)
        positions = []
        for p in range(data_len):
            power = data_len - 1 - p
            x_inv = self.gf.exp(self.gf.element_count - power)
            if self._eval_ascending(locator, x_inv) == 0:
                positions.append(p)
        return positions

    def error_magnitudes(self, synd, locator, positions, data_len):
        # Forney algorithm for first consecutive root a^0
        gf = self.gf
        evaluator = gf.poly_mul(synd, locator)[:self.corrections_len]
        derivative = [
            locator[i] if i & 1 else 0
            for i in range(1, len(locator))
        ]
        magnitudes = []
        for p in positions:
            power = data_len - 1 - p
            x = gf.exp(power)
            x_inv = gf.exp(gf.element_count - power)
            denominator = self._eval_ascending(derivative, x_inv)
            if denominator == 0:
                return None
            numerator = self._eval_ascending(evaluator, x_inv)
            magnitudes.append(gf.mul(x, gf.div(numerator, denominator)))
        return magnitudes

    def decode_block(self, data):
        """Corrected data codewords of a block, None if uncorrectable

        :param bytes data:  Data codewords followed by error correction
                            codewords
        """
        data_len = len(data)
        k = data_len - self.corrections_len
        if k <= 0:
            raise ValueError("Block is shorter than its error correction")
        synd = self.syndromes(data)
        if max(synd) == 0:
            return bytes(data[:k])
        locator, errors = self.error_locator(synd)
        if errors * 2 > self.corrections_len or len(locator) - 1 != errors:
            # Too many errors
            return None
        positions = self.find_errors(locator, data_len)
        if len(positions) != errors:
            # Couldn't locate errors
            return None
        magnitudes = self.error_magnitudes(synd, locator, positions, data_len)
        if magnitudes is None:
            return None
        corrected = bytearray(data)
        for p, magnitude in zip(positions, magnitudes):
            corrected[p] ^= magnitude
        if max(self.syndromes(corrected)) > 0:
            # Errors occured even after correction
            return None
        logger.debug("Corrected %d codeword(s) at %s", errors, positions)
        return bytes(corrected[:k])


def decode_block(data, ecc_length):
    return ReedSolomonDecoder(ecc_length).decode_block(data)
