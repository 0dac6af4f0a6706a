#!/usr/bin/env python3
"""
Example demonstrating custom token conventions and error handling.

The parser below uses ``++name:value`` for long options and ``+n`` for short
ones, so tokens that start with ``-`` are ordinary positional values. The
result of ``parse()`` is inspected directly instead of exiting on error.
"""

from loguru import logger

from typed_argparser import ArgumentParser, Policy, ValueKind

if __name__ == "__main__":
    # Show what the parser is doing
    logger.enable("typed_argparser")

    policy = Policy(long_prefix="++", short_prefix="+", assign_delim=":")

    # Simulate parsing arguments (replace with `None` to use CLI args)
    args = ["prog", "++seed:42", "+q", "-12.5"]

    parser = ArgumentParser(args, policy=policy)
    parser.positional("offset", float).required()
    parser.option(("++seed", "+s"), ValueKind.UINT64)
    parser.option(("++quiet", "+q"), bool)

    result = parser.parse()
    if result.is_err():
        print(f"error: {result.unwrap_err()}")
    else:
        parsed = result.unwrap()
        print(f"  offset: {parsed['offset']}")
        print(f"  seed: {parsed['++seed']}")
        print(f"  quiet: {parsed['+q']}")

    # A malformed value stops the parse with a descriptive message
    parser = ArgumentParser(["prog", "++seed:-1", "0"], policy=policy)
    parser.positional("offset", float)
    parser.option(("++seed", "+s"), ValueKind.UINT64)
    print(parser.parse())
