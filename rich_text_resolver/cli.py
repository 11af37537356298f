#!/usr/bin/env python3
import json
import logging

import click

from rich_text_resolver.constants import ENGINES
from rich_text_resolver.errors import RichTextResolverError
from rich_text_resolver.logger import get_logger, log_streaming_init, logger
from rich_text_resolver.portable_text.transformer import transform_to_portable_text
from rich_text_resolver.resolvers.html import to_html
from rich_text_resolver.resolvers.mapi import to_management_api_format
from rich_text_resolver.resolvers.markdown import to_markdown

OUTPUT_FORMATS = ("json", "html", "markdown", "mapi")


@click.command()  # type: ignore
@click.argument("input_file", metavar="[INPUT]", type=click.File("r"), default="-")
@click.option(
    "--engine",
    type=click.Choice(ENGINES),
    default=None,
    help="HTML parsing engine. Defaults to the RICH_TEXT_HTML_ENGINE environment variable, "
    "or `lxml` when that is not set.",
)
@click.option(
    "--output-format",
    type=click.Choice(OUTPUT_FORMATS),
    default="json",
    show_default=True,
    help="`json` writes the Portable Text itself; the other formats render it.",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Indent JSON output by this many spaces. Ignored for the other output formats.",
)
@click.option("-v", "--verbose", is_flag=True, default=False)
def main(input_file, engine, output_format, indent, verbose):
    """Transform Kontent.ai rich text HTML read from INPUT (default stdin) into Portable Text."""
    log_streaming_init(logging.DEBUG if verbose else get_logger().level)

    rich_text = input_file.read()
    try:
        portable_text = transform_to_portable_text(rich_text, engine=engine)
        if output_format == "json":
            output = json.dumps(portable_text, indent=indent, ensure_ascii=False)
        elif output_format == "html":
            output = to_html(portable_text)
        elif output_format == "markdown":
            output = to_markdown(portable_text)
        else:
            output = to_management_api_format(portable_text)
    except RichTextResolverError as e:
        logger.debug("failed to resolve rich text", exc_info=True)
        raise click.ClickException(str(e)) from e

    click.echo(output)


if __name__ == "__main__":
    main()  # type: ignore
