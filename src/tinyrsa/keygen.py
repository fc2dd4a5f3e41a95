"""Core Key Generation Utility, focusing on the generation of small random primes and the keys built from them.

This module is responsible for generating academic RSA key pairs. All primes are drawn from a deliberately tiny
window, `[PRIME_LOW_BOUND, PRIME_HIGH_BOUND)`, so that every intermediate product of the modular arithmetic fits into
a signed 32-bit integer. None of this is secure, and it is not supposed to be.

Typical usage example:

    p, q = generate_primes()
    e, d, n = generate_key_pair()
    d = mod_inverse(17, 3120)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import random
import secrets
from typing import Literal, overload

# Primes stay below 2**7 + 2**6, so (p*q - 1)**2 never exceeds INT32_MAX.
PRIME_LOW_BOUND: int = 61
PRIME_HIGH_BOUND: int = 192
KEY_LOW_BOUND: int = 31
MAX_MESSAGE: int = PRIME_LOW_BOUND * PRIME_LOW_BOUND - 1
INT32_MAX: int = 2**31 - 1

_SYSTEM_RANDOM: random.Random = secrets.SystemRandom()


def is_prime(n: int) -> bool:
    """Test whether a number is prime using plain trial division.

    If `n` has a divisor `x` then either `x` or `n / x` is at most `sqrt(n)`, so only odd divisors up to and
    including `isqrt(n)` are tried.

    Args:
        n: The number to test.

    Returns:
        True if `n` is prime, False otherwise.
    """
    if n in (2, 3):
        return True
    if n < 2 or n % 2 == 0:
        return False
    for i in range(3, math.isqrt(n) + 1, 2):
        if n % i == 0:
            return False
    return True


def generate_prime(rng: random.Random | None = None) -> int:
    """Randomly generate a prime number in the range `[PRIME_LOW_BOUND, PRIME_HIGH_BOUND)`.

    Draws a random starting point in the window, makes it odd and walks downwards in steps of two until a prime is
    hit. Should the walk leave the window at the bottom it wraps to the largest odd number below `PRIME_HIGH_BOUND`,
    so the result can never escape the window.

    Args:
        rng: Random source to draw from. Defaults to the system random source.

    Returns:
        A prime in the range `[PRIME_LOW_BOUND, PRIME_HIGH_BOUND)`.
    """
    rng = rng or _SYSTEM_RANDOM
    top = PRIME_HIGH_BOUND - 1 if PRIME_HIGH_BOUND % 2 == 0 else PRIME_HIGH_BOUND - 2
    n = rng.randrange(PRIME_LOW_BOUND, PRIME_HIGH_BOUND)
    if n % 2 == 0:
        n -= 1
    while not is_prime(n):
        n -= 2
        if n < PRIME_LOW_BOUND:
            n = top
    return n


def generate_primes(rng: random.Random | None = None) -> tuple[int, int]:
    """Generates a pair of distinct primes for a key.

    Args:
        rng: Random source to draw from. Defaults to the system random source.

    Returns:
        A pair of distinct primes, both within the prime window.
    """
    p = generate_prime(rng)
    q = generate_prime(rng)
    while p == q:  # Far likelier than with real key sizes.
        q = generate_prime(rng)
    return p, q


def gcd(n1: int, n2: int) -> int:
    """Find the greatest common divisor of two numbers with the iterative Euclidean algorithm.

    Args:
        n1: First number. Must be non-negative.
        n2: Second number. Must be non-negative.
            At least one of `n1` and `n2` must be positive.

    Returns:
        The greatest common divisor of `n1` and `n2`.

    Raises:
        ValueError: If either number is negative or both are zero.
    """
    if n1 < n2:
        n1, n2 = n2, n1
    if n2 < 0 or n1 < 1:
        raise ValueError("gcd arguments must be non-negative and not both zero")
    while n2 != 0:
        n1, n2 = n2, n1 % n2
    return n1


def generate_coprime(n: int, rng: random.Random | None = None) -> int:
    """Randomly generate an integer coprime to `n` in the range `[KEY_LOW_BOUND, n)`.

    An even `n` is only coprime to odd numbers, so the search walks in steps of two over odd candidates. An odd `n`
    can be coprime to either parity and the search walks in steps of one. If the walk drops below `KEY_LOW_BOUND` it
    restarts at `n - 1`, which is always coprime to `n` (and odd whenever `n` is even).

    Args:
        n: The number to be coprime to, usually a totient. Must be greater than `KEY_LOW_BOUND`.
        rng: Random source to draw from. Defaults to the system random source.

    Returns:
        A number coprime to `n`.

    Raises:
        ValueError: If `n` leaves no room above `KEY_LOW_BOUND`.
    """
    if n <= KEY_LOW_BOUND:
        raise ValueError(f"n must be greater than {KEY_LOW_BOUND}")
    rng = rng or _SYSTEM_RANDOM
    copn = rng.randrange(KEY_LOW_BOUND, n)
    step = 1
    if n % 2 == 0:
        step = 2
        if copn % 2 == 0:
            copn -= 1
    while gcd(n, copn) != 1:
        copn -= step
        if copn < KEY_LOW_BOUND:
            copn = n - 1
    return copn


def mod_inverse(e: int, totient: int) -> int:
    """Find `d` such that `e * d = 1 (mod totient)` using the Extended Euclidean Algorithm.

    Solves `e*d - K*totient = 1` iteratively, only tracking the coefficient of `e`. The raw coefficient may be
    negative; it is normalised into `[0, totient)` before being returned.

    Args:
        e: The number to invert. Must be coprime to `totient`.
        totient: The modulus of the inversion. Must be positive.

    Returns:
        The modular inverse of `e`.

    Raises:
        ValueError: If `totient` is not positive or `e` has no inverse modulo `totient`.
    """
    if totient < 1:
        raise ValueError("totient must be positive")
    big_d, r, big_r = 1, totient, e
    d = 0
    while big_r != 0:
        quotient = r // big_r
        big_d, d = d - quotient * big_d, big_d
        big_r, r = r - quotient * big_r, big_r
    if abs(r) != 1:
        raise ValueError(f"{e} is not invertible modulo {totient}")
    # r ends as -1 only for negative e; the sign flips the coefficient.
    return (d * r) % totient


@overload
def generate_key_pair(rng: random.Random | None = None,
                      expose_primes: Literal[False] = False) -> tuple[int, int, int]:
    ...


@overload
def generate_key_pair(rng: random.Random | None = None,
                      expose_primes: Literal[True] = False) -> tuple[int, int, int, int, int]:
    ...


def generate_key_pair(
    rng: random.Random | None = None,
    expose_primes: bool = False
) -> tuple[int, int, int] | tuple[int, int, int, int, int]:
    """Generates an academic RSA key pair.

    Draws two distinct primes, picks a public exponent coprime to the totient and derives the private exponent.

    Args:
        rng: Random source to draw from. Defaults to the system random source.
        expose_primes: Whether to export the prime numbers as well or not. Defaults to False.

    Returns:
        A tuple of (public exponent, private exponent, modulus) or if exposed
        (public exponent, private exponent, modulus, p, q)
    """
    p, q = generate_primes(rng)
    totient = (p - 1) * (q - 1)
    e = generate_coprime(totient, rng)
    d = mod_inverse(e, totient)
    n = p * q
    if not expose_primes:
        del p, q
        return e, d, n
    return e, d, n, p, q
