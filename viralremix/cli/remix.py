"""
Remix CLI Commands

Run the remix pipeline once from the terminal, or serve the API.
"""

import asyncio
import json
import logging
from typing import Optional, Tuple

import click

from ..core.config import Config
from ..services.rate_limiter import FixedWindowRateLimiter
from ..services.remix_pipeline import PipelineOutcome, RemixPipeline


logger = logging.getLogger(__name__)

CLI_CLIENT_ID = "cli"


async def _run_remix(raw_text: str, niche: Optional[str], platforms: Tuple[str, ...]) -> PipelineOutcome:
    pipeline = RemixPipeline(rate_limiter=FixedWindowRateLimiter())
    return await pipeline.handle(
        "POST",
        CLI_CLIENT_ID,
        {"rawText": raw_text, "niche": niche, "platforms": list(platforms)}
    )


@click.command(name="remix")
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option('--niche', default=None, help='Topic/category (default: general)')
@click.option('--platform', 'platforms', multiple=True,
              help='Target platform, repeatable (e.g. --platform tiktok --platform youtube_shorts)')
@click.option('--output-json', type=click.Path(), help='Write the full result to a JSON file')
def remix_command(source, niche: Optional[str], platforms: Tuple[str, ...], output_json: Optional[str]):
    """
    Analyze competitor content and generate platform scripts.

    SOURCE is a text file with the competitor content ("-" reads stdin).

    Examples:
        viralremix remix transcript.txt --niche fitness --platform tiktok
        cat post.txt | viralremix remix - --platform tiktok --platform facebook_reels
    """
    raw_text = source.read()

    click.echo("=" * 60, err=True)
    click.echo("🔁 ViralRemix", err=True)
    click.echo("=" * 60, err=True)
    click.echo(f"Analysis model: {Config.GEMINI_MODEL}", err=True)
    click.echo(f"Generation model: {Config.OPENAI_MODEL}", err=True)
    click.echo(f"Niche: {niche or 'general'}", err=True)
    click.echo(f"Platforms: {', '.join(platforms) or '(none)'}", err=True)
    click.echo(err=True)

    outcome = asyncio.run(_run_remix(raw_text, niche, platforms))
    result = json.dumps(outcome.content, indent=2, ensure_ascii=False)

    if not outcome.ok:
        click.echo(f"❌ Error ({outcome.status_code}): {outcome.content.get('error')}", err=True)
        click.echo(result)
        raise SystemExit(1)

    if output_json:
        with open(output_json, 'w', encoding='utf-8') as f:
            f.write(result)
        click.echo(f"📄 Results exported to: {output_json}", err=True)
    else:
        click.echo(result)

    contents = outcome.content["generated"]
    if isinstance(contents, dict) and isinstance(contents.get("platform_contents"), list):
        total = sum(len(p.get("items") or []) for p in contents["platform_contents"] if isinstance(p, dict))
        click.echo(f"✅ Generated {total} variants across {len(contents['platform_contents'])} platforms", err=True)
    else:
        click.echo("✅ Done", err=True)


@click.command(name="serve")
@click.option('--host', default='0.0.0.0', help='Bind address')
@click.option('--port', default=8000, type=int, help='Bind port')
@click.option('--reload', is_flag=True, help='Restart on code changes (development)')
def serve_command(host: str, port: int, reload: bool):
    """
    Serve the remix API with uvicorn.

    Examples:
        viralremix serve
        viralremix serve --port 3000 --reload
    """
    import uvicorn

    uvicorn.run("viralremix.api.app:app", host=host, port=port, reload=reload)
