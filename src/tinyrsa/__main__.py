"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that prompts for whichever arguments
are missing from the command line, unless non-interactive mode is requested, in which case they are an error.

Typical usage example:

    tinyrsa genkeys
    tinyrsa -n enc 65 17 3233
    OR
    python -m tinyrsa crack 17 3233
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import pathlib
import sys
import typing
import warnings

import tinyrsa


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = int
    choices: list[str] | None = None
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in Tiny RSA.",
            format=str,
            choices=["genkeys", "enc", "dec", "crack", "testprime", "testgcd"],
        ),
    "genkeys": HelpData("Key generation utility."),
    "enc": HelpData("Encryption utility."),
    "dec": HelpData("Decryption utility."),
    "crack": HelpData("Private key recovery utility."),
    "testprime": HelpData("Primality test, for debugging."),
    "testgcd": HelpData("Greatest common divisor, for debugging."),
    "m": HelpData(f"Plaintext, an integer in range [0, {tinyrsa.MAX_MESSAGE}]."),
    "s": HelpData("Ciphertext, an integer smaller than the modulus cipher."),
    "e": HelpData("Public encryption key."),
    "d": HelpData("Private decryption key."),
    "c": HelpData("Modulus cipher."),
    "n": HelpData("Number to test for primality."),
    "a": HelpData("First number."),
    "b": HelpData("Second number."),
    "public_key": HelpData("Location of a public key file.", format=pathlib.Path),
    "private_key": HelpData("Location of a private key file.", format=pathlib.Path),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            format=str,
            choices=["Y", "N"],
            default="N",
        ),
}

needs = {
    "genkeys": (),
    "enc": ("m", "e", "c"),
    "dec": ("s", "d", "c"),
    "crack": ("e", "c"),
    "testprime": ("n",),
    "testgcd": ("a", "b"),
}


def positional(parser: argparse.ArgumentParser, *names: str) -> None:
    for name in names:
        parser.add_argument(name, nargs="?", type=help_dict[name].format, help=help_dict[name].description)


pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public-key",
                    "-p",
                    dest="public_key",
                    type=help_dict["public_key"].format,
                    help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private-key",
                     "-P",
                     dest="private_key",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
corep = argparse.ArgumentParser(prog="tinyrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {tinyrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

genkeys = commands.add_parser("genkeys", parents=[pubkey, privkey], help=help_dict["genkeys"].description)
genkeys.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)
enc = commands.add_parser("enc", parents=[pubkey], help=help_dict["enc"].description)
positional(enc, "m", "e", "c")
dec = commands.add_parser("dec", parents=[privkey], help=help_dict["dec"].description)
positional(dec, "s", "d", "c")
crack = commands.add_parser("crack", parents=[pubkey], help=help_dict["crack"].description)
positional(crack, "e", "c")
testprime = commands.add_parser("testprime", help=help_dict["testprime"].description)
positional(testprime, "n")
testgcd = commands.add_parser("testgcd", help=help_dict["testgcd"].description)
positional(testgcd, "a", "b")


def checkmodes(arg: str, non_interactive: bool):
    helper_data = help_dict[arg]
    if non_interactive and helper_data.default is not None:
        return helper_data.default
    if non_interactive:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, non_interactive: bool, prntr: typing.Callable = print):
    helper_data = checkmodes(arg, non_interactive)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    vald = set(helper_data.choices)
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, non_interactive: bool, prntr: typing.Callable = print):
    helper_data = checkmodes(arg, non_interactive)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify {arg}!")
    prntr("Description: " + helper_data.description)
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def fail(text: str) -> typing.NoReturn:
    print(text)
    sys.exit(1)


def load_key_files(args: argparse.Namespace) -> None:
    """Fill in exponent and modulus from key files, where given."""
    if getattr(args, "public_key", None) is not None:
        args.e, args.c = tinyrsa.import_public(args.public_key)
    if getattr(args, "private_key", None) is not None:
        keys = tinyrsa.import_private(args.private_key)
        args.d, args.c = keys.private_key, keys.modulus


def run(args: argparse.Namespace, pspr: typing.Callable) -> None:
    """Executes the subcommand on complete arguments."""
    match args.subcommand:
        case "genkeys":
            pspr("Generating keys...")
            keys = tinyrsa.generate_keys()
            for target, exporter in ((getattr(args, "public_key", None), tinyrsa.export_public),
                                     (getattr(args, "private_key", None), tinyrsa.export_private)):
                if target is not None:
                    exporter(target, keys)
            print(f"--> Public encryption key e: {keys.public_key}")
            print(f"--> Private decryption key d: {keys.private_key}")
            print(f"--> Modulus cipher c: {keys.modulus}")
        case "enc":
            pspr("Encrypting...")
            s = tinyrsa.encrypt(args.m, args.e, args.c)
            if s is None:
                fail(f"STOP: plaintext is too big! (max = {tinyrsa.MAX_MESSAGE})")
            print(f"--> Ciphertext s: {s}")
        case "dec":
            pspr("Decrypting...")
            m = tinyrsa.decrypt(args.s, args.d, args.c)
            if m is None:
                fail("STOP: ciphertext is not smaller than the modulus cipher!")
            print(f"--> Plaintext m: {m}")
        case "crack":
            pspr("Cracking...")
            print(f"--> Recovered decryption key d: {tinyrsa.crack(args.e, args.c)}")
        case "testprime":
            print(f"is_prime({args.n}) = {tinyrsa.is_prime(args.n)}")
        case "testgcd":
            print(f"gcd({args.a}, {args.b}) = {tinyrsa.gcd(args.a, args.b)}")


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    non_interactive = args.non_interactive

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not non_interactive:
            print(text)

    pspr("Welcome to Tiny RSA!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", non_interactive)
    try:
        if args.subcommand != "genkeys":
            load_key_files(args)
    except (IOError, ValueError) as exc:
        fail(f"STOP: could not load key file! {exc}")
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            setattr(args, reqs, input_handler(reqs, non_interactive))
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    if args.subcommand == "genkeys":
        targets = [t for t in (getattr(args, "public_key", None), getattr(args, "private_key", None)) if t]
        if any(t.exists() for t in targets):
            rs = getattr(args, "overwrite", None)
            if rs is None:
                rs = choice_handler("overwrite", non_interactive, pspr)
            if rs == "N":
                fail("Destination private or public key already exists!")
    pspr("\nInput Complete! Executing...")
    with warnings.catch_warnings():
        # Range failures are reported by the return value below.
        warnings.simplefilter("ignore", tinyrsa.MessageRangeWarning)
        try:
            run(args, pspr)
        except ValueError as exc:
            fail(f"STOP: {exc}")
    pspr("Thank you for using Tiny RSA!")


if __name__ == "__main__":
    main()
