"""
Main CLI entry point for ViralRemix
"""

import logging

import click
from .remix import remix_command, serve_command


@click.group()
@click.version_option(version='1.0.0')
@click.option('--verbose', '-v', is_flag=True, help='Show pipeline logs')
def cli(verbose: bool):
    """
    ViralRemix - Competitor content remixing for short-form video

    Analyze competitor marketing text with Gemini and generate TikTok,
    YouTube Shorts and Facebook Reels scripts with OpenAI.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Register commands
cli.add_command(remix_command)
cli.add_command(serve_command)


if __name__ == '__main__':
    cli()
