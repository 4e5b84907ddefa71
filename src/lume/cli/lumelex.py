"""
lumelex - Lume Token Dump Command-Line Interface
================================================

Runs the Lume lexer over a source file and prints the token stream.
Useful when working on the parser or when a lexical error message needs
a closer look.

Usage Examples
--------------
Token listing:
    $ lumelex main.lume

Machine-readable output:
    $ lumelex --json main.lume > tokens.json

Debug trace of every token:
    $ lumelex -v main.lume
"""

import json
import logging
import math
from pathlib import Path
from typing import Optional

import click

from lume import __version__
from lume.cli.errors import handle_cli_exception
from lume.lexer import Token, TokenType, lex

logger = logging.getLogger(__name__)


# =============================================================================
# Output Formatting
# =============================================================================

def format_token(token: Token) -> str:
    """Format one token as 'start..end  TYPE  value'."""
    where = f"{token.span.start}..{token.span.end}"
    line = f"{where:<12} {token.type.name}"
    if token.prefix is not None:
        line += f"  {token.prefix} {token.value!r}"
    elif token.value is not None:
        line += f"  {token.value!r}"
    return line


def token_to_dict(token: Token) -> dict:
    """
    Convert a token to a JSON-serializable dictionary.

    Float literals that overflow to infinity are written as the string
    "inf"; JSON has no infinite number.
    """
    value = token.value
    if isinstance(value, float) and not math.isfinite(value):
        value = str(value)
    return {
        "type": token.type.name,
        "value": value,
        "prefix": token.prefix,
        "start": token.span.start,
        "end": token.span.end,
    }


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print tokens as a JSON array",
)
@click.option(
    "--no-eof",
    is_flag=True,
    help="Leave the trailing EOF token out of the listing",
)
@click.option(
    "--name",
    default=None,
    help="Source name recorded in spans and errors (default: the file path)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (logs every token as it is scanned)",
)
@click.version_option(version=__version__, prog_name="lumelex")
def main(
    input_file: Path,
    as_json: bool,
    no_eof: bool,
    name: Optional[str],
    verbose: bool,
) -> None:
    """
    Print the token stream of a Lume source file.

    INPUT_FILE is the Lume source file (UTF-8) to tokenize.

    \b
    Examples:
        lumelex main.lume            # One token per line
        lumelex --json main.lume     # JSON array of tokens
        lumelex -v main.lume         # Trace every token on stderr
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        # Spans are offsets into the file as stored, CRLF line endings included
        source = input_file.read_bytes().decode("utf-8")
        tokens = lex(source, name or str(input_file))
    except Exception as e:
        handle_cli_exception(e, verbose)

    if no_eof:
        tokens = [t for t in tokens if t.type != TokenType.EOF]

    logger.info(f"{input_file}: {len(tokens)} tokens")

    if as_json:
        click.echo(json.dumps(
            [token_to_dict(t) for t in tokens], ensure_ascii=False, allow_nan=False, indent=2
        ))
        return

    for token in tokens:
        click.echo(format_token(token))


if __name__ == "__main__":
    main()
