# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import random

import pytest
import sympy

from tinyrsa import keygen

WINDOW_PRIMES = list(sympy.primerange(keygen.PRIME_LOW_BOUND, keygen.PRIME_HIGH_BOUND))

base_primetest_cases = [
    # Edge Cases (neither)
    (-7, False),
    (0, False),
    (1, False),
    # Known Primes
    (2, True),
    (3, True),
    (5, True),
    (7, True),
    (97, True),
    (191, True),
    (3571, True),
    (9973, True),
    # Composite
    (4, False),
    (9, False),
    # Perfect squares of primes, where the loop bound matters
    (25, False),
    (49, False),
    (121, False),
    (169, False),
    (36481, False),
    # Fermat Pseudoprimes and Carmichael numbers
    (341, False),
    (561, False),
    (1105, False),
    (2047, False),
]


def scripted_rng(mocker, *draws):
    """Random source whose `randrange` returns `draws` in order."""
    rng = mocker.Mock(spec=random.Random)
    rng.randrange.side_effect = list(draws)
    return rng


@pytest.mark.parametrize("n,expected", base_primetest_cases)
def test_is_prime(n, expected):
    assert keygen.is_prime(n) == expected


def test_is_prime_matches_reference():
    for n in range(-2, 20000):
        assert keygen.is_prime(n) == sympy.isprime(n), n


def test_bounds_fit_int32():
    largest = WINDOW_PRIMES[-1] * WINDOW_PRIMES[-1]
    assert (largest - 1)**2 <= keygen.INT32_MAX
    assert keygen.MAX_MESSAGE == 3720
    assert keygen.MAX_MESSAGE < WINDOW_PRIMES[0] * WINDOW_PRIMES[1]


@pytest.mark.parametrize("draw,expected", [(61, 61), (62, 61), (64, 61), (100, 97), (190, 181), (191, 191)])
def test_generate_prime_walks_down(mocker, draw, expected):
    rng = scripted_rng(mocker, draw)
    assert keygen.generate_prime(rng) == expected
    rng.randrange.assert_called_once_with(keygen.PRIME_LOW_BOUND, keygen.PRIME_HIGH_BOUND)


def test_generate_prime_wraps_at_low_bound(mocker):
    mocker.patch("tinyrsa.keygen.PRIME_LOW_BOUND", 62)
    rng = scripted_rng(mocker, 63)
    assert keygen.generate_prime(rng) == 191


@pytest.mark.parametrize("seed", range(25))
def test_generate_prime_in_window(seed):
    p = keygen.generate_prime(random.Random(seed))
    assert p in WINDOW_PRIMES


def test_generate_prime_default_source():
    assert keygen.generate_prime() in WINDOW_PRIMES


def test_generate_prime_deterministic_under_seed():
    assert [keygen.generate_prime(random.Random(7)) for _ in range(3)] == [keygen.generate_prime(random.Random(7))] * 3


def test_generate_primes_distinct(mocker):
    rng = scripted_rng(mocker, 100, 100, 98, 120)
    assert keygen.generate_primes(rng) == (97, 113)
    assert rng.randrange.call_count == 4


@pytest.mark.parametrize("a,b,expected", [(12, 18, 6), (18, 12, 6), (5, 0, 5), (0, 5, 5), (1, 1, 1), (17, 3120, 1),
                                          (3120, 17, 1), (61, 3233, 61), (2**31 - 1, 2**30, 1)])
def test_gcd(a, b, expected):
    assert keygen.gcd(a, b) == expected


def test_gcd_matches_reference():
    rng = random.Random(1234)
    for _ in range(500):
        a, b = rng.randrange(0, 10**6), rng.randrange(1, 10**6)
        assert keygen.gcd(a, b) == keygen.gcd(b, a) == math.gcd(a, b)


@pytest.mark.parametrize("a,b", [(0, 0), (-1, 5), (5, -1), (-3, -3)])
def test_gcd_errors(a, b):
    with pytest.raises(ValueError):
        keygen.gcd(a, b)


@pytest.mark.parametrize("n,draw,expected", [
    (3120, 40, 37),  # Even n: 39 shares 3 and 13, 37 does not.
    (3120, 38, 37),  # Even draw is made odd first.
    (2046, 33, 2045),  # 33 and 31 both divide 2046, wraps to n - 1.
    (93, 31, 92),  # Odd n: 31 divides 93, wraps to the (even) n - 1.
    (105, 36, 34),  # Odd n: 36 and 35 share factors, 34 does not.
])
def test_generate_coprime_walk(mocker, n, draw, expected):
    rng = scripted_rng(mocker, draw)
    assert keygen.generate_coprime(n, rng) == expected
    rng.randrange.assert_called_once_with(keygen.KEY_LOW_BOUND, n)


@pytest.mark.parametrize("n", [keygen.KEY_LOW_BOUND + 1, 64, 3120, 3233, 9999, 36100])
def test_generate_coprime_conditions(n):
    rng = random.Random(n)
    for _ in range(50):
        e = keygen.generate_coprime(n, rng)
        assert keygen.KEY_LOW_BOUND <= e < n
        assert math.gcd(e, n) == 1
        if n % 2 == 0:
            assert e % 2 == 1


@pytest.mark.parametrize("n", [-5, 0, 1, keygen.KEY_LOW_BOUND])
def test_generate_coprime_errors(n):
    with pytest.raises(ValueError):
        keygen.generate_coprime(n)


@pytest.mark.parametrize("e,totient,expected", [(17, 3120, 2753), (3, 11, 4), (7, 40, 23), (1, 5, 1), (1, 1, 0)])
def test_mod_inverse(e, totient, expected):
    assert keygen.mod_inverse(e, totient) == expected


@pytest.mark.parametrize("e,totient", [(3127, 3120), (-3, 11), (-17, 3120), (65537, 3120), (31, 36000)])
def test_mod_inverse_out_of_range_inputs(e, totient):
    assert keygen.mod_inverse(e, totient) == pow(e, -1, totient)


def test_mod_inverse_matches_reference():
    rng = random.Random(99)
    for _ in range(500):
        totient = rng.randrange(32, 40000)
        e = keygen.generate_coprime(totient, rng)
        d = keygen.mod_inverse(e, totient)
        assert 0 <= d < totient
        assert d == sympy.mod_inverse(e, totient)


@pytest.mark.parametrize("e,totient", [(6, 9), (0, 7), (3120, 3120), (5, 0), (5, -4)])
def test_mod_inverse_errors(e, totient):
    with pytest.raises(ValueError):
        keygen.mod_inverse(e, totient)


@pytest.mark.parametrize("seed", range(20))
def test_generate_key_pair_conditions(seed):
    e, d, n, p, q = keygen.generate_key_pair(random.Random(seed), expose_primes=True)
    totient = (p - 1) * (q - 1)
    assert p != q
    assert p in WINDOW_PRIMES and q in WINDOW_PRIMES
    assert n == p * q
    assert keygen.KEY_LOW_BOUND <= e < totient
    assert (e * d) % totient == 1
    assert 0 <= d < totient


def test_generate_key_pair_hides_primes():
    assert len(keygen.generate_key_pair(random.Random(3))) == 3


def test_generate_key_pair_textbook(mocker):
    mocker.patch("tinyrsa.keygen.generate_primes", return_value=(61, 53))
    mocker.patch("tinyrsa.keygen.generate_coprime", return_value=17)
    assert keygen.generate_key_pair() == (17, 2753, 3233)
    keygen.generate_coprime.assert_called_once_with(3120, None)
