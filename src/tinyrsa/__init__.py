"""Academic RSA on machine-word sized integers.

Provides textbook RSA key generation, encryption, decryption and key recovery (cracking) using deliberately tiny
primes, so that every intermediate value fits into a signed 32-bit integer. Also provides the number-theoretic
helpers underneath, and PKCS#1 PEM import/export of the resulting keys.

Typical usage example:

    keys = generate_keys()
    s = encrypt(65, keys.public_key, keys.modulus)
    m = decrypt(s, keys.private_key, keys.modulus)
    d = crack(keys.public_key, keys.modulus)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from tinyrsa.attack import crack
from tinyrsa.attack import factor_small
from tinyrsa.keyfile import export_private
from tinyrsa.keyfile import export_public
from tinyrsa.keyfile import import_private
from tinyrsa.keyfile import import_public
from tinyrsa.keygen import gcd
from tinyrsa.keygen import generate_coprime
from tinyrsa.keygen import generate_key_pair
from tinyrsa.keygen import generate_prime
from tinyrsa.keygen import generate_primes
from tinyrsa.keygen import is_prime
from tinyrsa.keygen import KEY_LOW_BOUND
from tinyrsa.keygen import MAX_MESSAGE
from tinyrsa.keygen import mod_inverse
from tinyrsa.keygen import PRIME_HIGH_BOUND
from tinyrsa.keygen import PRIME_LOW_BOUND
from tinyrsa.rsa import decrypt
from tinyrsa.rsa import encrypt
from tinyrsa.rsa import generate_keys
from tinyrsa.rsa import InvalidMessageError
from tinyrsa.rsa import KeyPair
from tinyrsa.rsa import MessageRangeWarning
from tinyrsa.rsa import mod_pow

__version__ = "0.0.1"
__all__ = [
    "KeyPair",
    "InvalidMessageError",
    "MessageRangeWarning",
    "PRIME_LOW_BOUND",
    "PRIME_HIGH_BOUND",
    "KEY_LOW_BOUND",
    "MAX_MESSAGE",
    "is_prime",
    "gcd",
    "mod_pow",
    "mod_inverse",
    "generate_prime",
    "generate_primes",
    "generate_coprime",
    "generate_key_pair",
    "generate_keys",
    "encrypt",
    "decrypt",
    "factor_small",
    "crack",
    "export_public",
    "export_private",
    "import_public",
    "import_private",
]
