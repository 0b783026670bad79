"""
CLI interface for Rangepass.
"""

import logging
import string
import sys
from typing import List, Optional, Tuple

import click

from .config import ExcludeGroup, GenerateOptions, IncludeGroup, load_policy
from .exceptions import ConfigurationError, RangepassException
from .generator import CharsetGenerator
from .presets import exclude_preset, include_preset, list_presets
from .ranges import RangeSpec, parse_range_spec, to_code_point
from .utils.random_source import RandomSource

DEFAULT_LENGTH = 16


def parse_point(token: str) -> int:
    """Parse 'U+20AC', '0x20AC' or a single literal character."""
    if len(token) > 2 and token[:2].lower() in ("u+", "0x"):
        digits = token[2:]
        if not all(c in string.hexdigits for c in digits):
            raise ConfigurationError(f"Invalid code point '{token}'")
        return to_code_point(int(digits, 16))

    if len(token) == 1:
        return to_code_point(token)

    raise ConfigurationError(
        f"'{token}' is not a character, U+XXXX or 0xXXXX code point"
    )


def parse_items(text: str) -> Tuple[RangeSpec, ...]:
    """
    Parse a comma-separated item list such as 'a..z,0..9,U+20AC,_'.

    A literal comma is written as U+002C.
    """
    specs: List[RangeSpec] = []
    for token in text.split(","):
        if not token:
            continue
        if ".." in token and token != "..":
            lower, _, upper = token.partition("..")
            specs.append(parse_range_spec([parse_point(lower), parse_point(upper)]))
        else:
            specs.append(parse_range_spec(parse_point(token)))
    return tuple(specs)


def parse_preset_arg(value: str) -> IncludeGroup:
    """Parse 'NAME' or 'NAME:MIN'."""
    name, _, minimum = value.partition(":")
    if not minimum:
        return include_preset(name)
    try:
        return include_preset(name, int(minimum))
    except ValueError:
        raise ConfigurationError(f"Invalid preset minimum in '{value}'") from None


def build_options(config: Optional[str], includes: Tuple[Tuple[str, int], ...],
                  excludes: Tuple[str, ...], presets: Tuple[str, ...],
                  exclude_presets: Tuple[str, ...]) -> Tuple[Optional[object], GenerateOptions]:
    """Combine a policy file with command line groups."""
    length = None
    options = GenerateOptions()
    if config:
        length, options = load_policy(config)

    extra = GenerateOptions(
        include=tuple(parse_preset_arg(p) for p in presets)
        + tuple(IncludeGroup(chars=parse_items(items), min=minimum) for items, minimum in includes),
        exclude=tuple(exclude_preset(p) for p in exclude_presets)
        + tuple(ExcludeGroup(chars=parse_items(items)) for items in excludes),
    )
    return length, options.merged(extra)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Rangepass - random strings from constrained Unicode ranges."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.argument("length", type=int, required=False)
@click.option("--include", "-i", "includes", type=(str, int), multiple=True,
              metavar="ITEMS MIN", help="Include group, e.g. -i a..z,0..9 2")
@click.option("--exclude", "-x", "excludes", multiple=True, metavar="ITEMS",
              help="Exclude characters, e.g. -x 0,O,1,l,I")
@click.option("--preset", "-p", "presets", multiple=True, metavar="NAME[:MIN]",
              help="Include a named preset (see 'rangepass presets')")
@click.option("--exclude-preset", "exclude_presets", multiple=True, metavar="NAME",
              help="Exclude a named preset")
@click.option("--config", "-c", type=click.Path(dir_okay=False), help="JSON policy file")
@click.option("--count", "-n", default=1, type=click.IntRange(1), help="Number of strings (default: 1)")
@click.option("--seed", type=int, help="Seed for reproducible output")
@click.option("--copy", is_flag=True, help="Copy the generated string to clipboard")
@click.option("--show-policy", is_flag=True, help="Describe the groups on stderr")
@click.option("--escape", is_flag=True, help="Print non-ASCII characters as \\uXXXX escapes")
def generate(length: Optional[int], includes: Tuple[Tuple[str, int], ...],
             excludes: Tuple[str, ...], presets: Tuple[str, ...],
             exclude_presets: Tuple[str, ...], config: Optional[str], count: int,
             seed: Optional[int], copy: bool, show_policy: bool, escape: bool) -> None:
    """Generate random strings of at least LENGTH characters."""
    if copy and count > 1:
        click.echo("Error: Cannot use --copy with --count greater than 1", err=True)
        sys.exit(1)

    try:
        file_length, options = build_options(config, includes, excludes, presets, exclude_presets)
        if length is None:
            length = file_length if file_length is not None else DEFAULT_LENGTH

        generator = CharsetGenerator(options, rng=RandomSource(seed))
        if show_policy:
            click.echo(generator.describe(), err=True)

        values = [generator.generate(length) for _ in range(count)]
    except RangepassException as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if copy:
        try:
            import pyperclip
            pyperclip.copy(values[0])
            click.echo("Generated string copied to clipboard.")
            return
        except ImportError:
            click.echo("pyperclip not installed. Install with: pip install pyperclip", err=True)
        except Exception as e:
            click.echo(f"Could not copy to clipboard: {e}", err=True)

    for value in values:
        if escape:
            value = value.encode("unicode_escape").decode("ascii")
        try:
            click.echo(value)
        except UnicodeEncodeError:
            click.echo(
                "Error: Generated string cannot be written in the output encoding "
                "(lone surrogates?). Use --escape",
                err=True,
            )
            sys.exit(1)


@cli.command()
def presets() -> None:
    """List the named character presets."""
    for name, chars in list_presets():
        click.echo(f"  {name:<12} {chars}")


def main() -> None:
    """Main entry point for the CLI application."""
    cli()


if __name__ == "__main__":
    main()
