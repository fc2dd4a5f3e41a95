"""Provides core RSA functionalities, namely key pairs, encryption and decryption.

Facilitates core RSA, solely under "textbook" conditions and on machine-word sized integers. Messages are plain
integers no greater than `MAX_MESSAGE`; there is no padding or encoding of any kind.

Typical usage example:

    keys = KeyPair.generate()
    c = keys.encrypt(65)
    r = keys.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random
import typing
import warnings

from tinyrsa import attack
from tinyrsa import keygen


class InvalidMessageError(ValueError):
    """Raised for a plaintext or ciphertext that can never be valid, such as a negative one."""


class MessageRangeWarning(RuntimeWarning):
    """Issued when a message is outside the range the key can handle. The operation then returns None."""


class KeyPair(typing.NamedTuple):
    """An academic RSA key pair.

    The primes used to build the modulus are not retained, much like with real keys.

    Attributes:
        public_key: The public (encryption) exponent.
        private_key: The private (decryption) exponent.
        modulus: The modulus cipher, product of the two primes.
    """
    public_key: int
    private_key: int
    modulus: int

    def encrypt(self, message: int) -> int | None:
        """Encrypt `message` with the public half of the pair. See `encrypt`."""
        return encrypt(message, self.public_key, self.modulus)

    def decrypt(self, ciphertext: int) -> int | None:
        """Decrypt `ciphertext` with the private half of the pair. See `decrypt`."""
        return decrypt(ciphertext, self.private_key, self.modulus)

    def crack(self) -> int:
        """Recover the private exponent from the public half alone. See `attack.crack`."""
        return attack.crack(self.public_key, self.modulus)

    @classmethod
    def generate(cls, rng: random.Random | None = None) -> "KeyPair":
        """Generates a new key pair.

        Args:
            rng: Random source to draw from. Defaults to the system random source.

        Returns:
            A new generated KeyPair.
        """
        e, d, n = keygen.generate_key_pair(rng)
        return cls(e, d, n)


def generate_keys(rng: random.Random | None = None) -> KeyPair:
    """Generate a public-private key pair and the corresponding modulus cipher."""
    return KeyPair.generate(rng)


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Computes `base**exponent % modulus` by repeated squaring.

    The baseline RSA primitive behind both encryption and decryption. Runs in O(log exponent) multiplications, each
    operand kept below `modulus`.

    Args:
        base: The base, usually the message. Reduced by `modulus` first.
        exponent: The exponent, usually a key. Must be non-negative.
        modulus: The modulus. Must be positive.

    Returns:
        The result in range `[0, modulus)`.

    Raises:
        ValueError: If `exponent` is negative or `modulus` is not positive.
    """
    if modulus < 1:
        raise ValueError("modulus must be positive")
    if exponent < 0:
        raise ValueError("exponent must be non-negative")
    result = 1 % modulus
    base %= modulus
    while exponent:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


def encrypt(message: int, public_key: int, modulus: int) -> int | None:
    """Encrypts the message with the public key.

    Args:
        message: The plaintext. Must be in range `[0, MAX_MESSAGE]`.
        public_key: The public encryption exponent.
        modulus: The modulus cipher.

    Returns:
        The ciphertext, or None if `message` is greater than `MAX_MESSAGE`.

    Raises:
        InvalidMessageError: If `message` is negative.
    """
    if message < 0:
        raise InvalidMessageError("Plaintext is a negative number.")
    if message > keygen.MAX_MESSAGE:
        warnings.warn(f"Plaintext is too big! (max = {keygen.MAX_MESSAGE})", MessageRangeWarning, stacklevel=2)
        return None
    return mod_pow(message, public_key, modulus)


def decrypt(ciphertext: int, private_key: int, modulus: int) -> int | None:
    """Decrypts the ciphertext with the private key.

    Args:
        ciphertext: The ciphertext. Must be a residue, in range `[0, modulus)`.
        private_key: The private decryption exponent.
        modulus: The modulus cipher.

    Returns:
        The plaintext, or None if `ciphertext` is not smaller than `modulus`.

    Raises:
        InvalidMessageError: If `ciphertext` is negative.
    """
    if ciphertext < 0:
        raise InvalidMessageError("Ciphertext is a negative number.")
    if ciphertext >= modulus:
        warnings.warn("Ciphertext is not smaller than the modulus cipher!", MessageRangeWarning, stacklevel=2)
        return None
    return mod_pow(ciphertext, private_key, modulus)
