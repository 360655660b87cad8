def modulo_gf2(a, mod):
    """Remainder of polynomial division over GF(2), polynomials as bit masks"""
    degree = mod.bit_length() - 1
    while a.bit_length() > degree:
        a ^= mod << (a.bit_length() - 1 - degree)
    return a


class GaloisField:
    """GF(2^8) arithmetic over log/exp tables

    The exponent table is doubled so that multiplication can index it with
    the plain sum of two logarithms.
    """
    def __init__(self, primitive_poly=0x11D):
        self.primitive_poly = primitive_poly
        self.element_count = (1 << (primitive_poly.bit_length() - 1)) - 1
        self.exp_table = []
        self.log_table = [None] * (self.element_count + 1)
        x = 1
        for i in range(self.element_count):
            self.exp_table.append(x)
            self.log_table[x] = i
            x <<= 1
            if x > self.element_count:
                x ^= primitive_poly
        self.exp_table = self.exp_table * 2

    def mul(self, a, b):
        if a == 0 or b == 0:
            return 0
        return self.exp_table[self.log_table[a] + self.log_table[b]]

    def div(self, a, b):
        if b == 0:
            raise ZeroDivisionError("Division by zero in GF(256)")
        if a == 0:
            return 0
        return self.exp(self.log_table[a] - self.log_table[b])

    def exp(self, a):
        return self.exp_table[a % self.element_count]

    def log(self, a):
        return self.log_table[a]

    def inverse(self, a):
        if a == 0:
            raise ZeroDivisionError("Zero has no inverse in GF(256)")
        return self.exp(-self.log_table[a])

    def poly_mul(self, a, b):
        res = [0] * (len(a) + len(b) - 1)
        for i, ai in enumerate(a):
            if ai == 0:
                continue
            for j, bj in enumerate(b):
                res[i + j] ^= self.mul(ai, bj)
        return res

    def poly_eval(self, polynomial, x):
        # Horner scheme, polynomial[0] is the highest coefficient
        y = 0
        for coeff in polynomial:
            y = self.mul(y, x) ^ coeff
        return y


gf256 = GaloisField()
