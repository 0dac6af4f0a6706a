#!/usr/bin/env python3
"""
Example script demonstrating the usage of ArgumentParser.

This script declares positional arguments and options of different types and
prints what was parsed. Try:

    python basic_example.py data.csv 3 --rate=0.25 -o out/ -v
"""

from pathlib import Path

from typed_argparser import ArgumentParser


def main() -> None:
    """Main function demonstrating the parser."""
    parser = ArgumentParser()

    source = parser.positional("source", Path).required().help("File to read")
    repeats = parser.positional("repeats", int).help("Number of passes")
    output = parser.option(("--output", "-o"), Path).required()
    rate = parser.option(("--rate", "-r"), float).help("Sampling rate")
    verbose = parser.option(("--verbose", "-v"), bool)

    args = parser.parse_or_exit()

    print("Parsed Arguments:")
    print("-" * 30)
    print(f"Source: {args[source]}")
    print(f"Repeats: {args.get(repeats, 1)}")
    print(f"Output: {args[output]}")
    print(f"Rate: {args.get(rate, 1.0)}")
    print(f"Verbose: {args.get(verbose, False)}")


if __name__ == "__main__":
    main()
