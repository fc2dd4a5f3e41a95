"""Recovers private keys from public ones by factoring the (tiny) modulus.

The adversarial counterpart to `keygen`. With primes this small, trial division finds the factors of the modulus
instantly, after which the private exponent follows exactly as it does during key generation.

Typical usage example:

    p, q = factor_small(3233)
    d = crack(17, 3233)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math

from tinyrsa import keygen


def factor_small(c: int) -> tuple[int, int]:
    """Splits `c` into two factors by trial division.

    Tries 2, then every odd number up to and including `isqrt(c)`. The first divisor found is returned alongside its
    cofactor. Meant for products of two primes; for other composites the split is merely the smallest factor.

    Args:
        c: The number to factor, usually a modulus cipher.

    Returns:
        A tuple of (smallest factor, cofactor).

    Raises:
        ValueError: If `c` is smaller than 4 or prime.
    """
    if c < 4:
        raise ValueError("c must be at least 4")
    if c % 2 == 0:
        return 2, c // 2
    for i in range(3, math.isqrt(c) + 1, 2):
        if c % i == 0:
            return i, c // i
    raise ValueError(f"{c} is prime and cannot be split")


def crack(public_key: int, modulus: int) -> int:
    """Recover the private decryption key from the public encryption key and the modulus cipher.

    Args:
        public_key: The public encryption exponent.
        modulus: The modulus cipher.

    Returns:
        The private decryption exponent.
    """
    p, q = factor_small(modulus)
    totient = (p - 1) * (q - 1)
    return keygen.mod_inverse(public_key, totient)
