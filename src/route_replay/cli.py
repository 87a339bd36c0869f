"""CLI interface for route-replay."""

import sys

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeRemainingColumn

from .constants import (
    ANIMATION_DURATION_DEFAULT,
    DEFAULT_EXPORT_FRAME_RATE,
    DEFAULT_EXPORT_RESOLUTION,
    DEFAULT_VIRTUAL_VIEWPORT,
    EXPORT_FRAME_RATES,
)
from .errors import RasterizationError, ValidationError
from .export_pipeline import ExportPipeline, ExportProgress, ExportResult, plan_headless_capture
from .logging_setup import init_logging
from .models import Route, load_routes
from .output import resolve_frame_sink, supported_sink_formats
from .render.renderer import RenderState
from .render.style import StyleConfig
from .settings import ExportSettings, default_output_name, parse_resolution, validate_settings

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_FORMATS_TEXT = ", ".join(supported_sink_formats()).upper()
DEFAULT_VIEWPORT_TEXT = "x".join(str(v) for v in DEFAULT_VIRTUAL_VIEWPORT)
COMMON_FRAME_RATES_TEXT = ", ".join(str(fps) for fps in EXPORT_FRAME_RATES)


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    routes_file: str = typer.Argument(..., help="JSON file containing the routes"),
    route_id: str = typer.Option(
        None, "--route-id", "-r", help="Route to animate (defaults to the first route)"
    ),
    out: str = typer.Option(
        None, "--output", "-o", help="Directory for the frame sequence (defaults to a timestamped name)"
    ),
    frame_format: str = typer.Option(
        "png", "--format", "-f", help=f"Frame image format ({SUPPORTED_FORMATS_TEXT})"
    ),
    resolution: str = typer.Option(
        DEFAULT_EXPORT_RESOLUTION, "--resolution", help="Output size as WIDTHxHEIGHT or a preset (720p, 1080p, 1440p, 4k)"
    ),
    fps: int = typer.Option(DEFAULT_EXPORT_FRAME_RATE, "--fps", help=f"Frames per second (common: {COMMON_FRAME_RATES_TEXT})"),
    duration: float = typer.Option(
        ANIMATION_DURATION_DEFAULT, "--duration", help="Animation length in seconds"
    ),
    static_routes: bool = typer.Option(
        False, "--static-routes/--no-static-routes", help="Draw the other routes as faint context"
    ),
    transparent: bool = typer.Option(False, "--transparent", help="Render without a background"),
    color: str = typer.Option(None, "--color", help="Color of the animated route"),
    debug: bool = typer.Option(False, "--debug", help="Overlay projection crosshairs"),
    viewport: str = typer.Option(
        DEFAULT_VIEWPORT_TEXT, "--viewport", help="Virtual screen size used to frame the capture region"
    ),
    max_frames: int | None = typer.Option(
        None, "--max-frames", min=1, help="Stop after this many frames"
    ),
    log_level: str = typer.Option(None, "--log-level", help="Logging level (overrides ROUTE_REPLAY_LOG_LEVEL)"),
) -> None:
    """
    Render a route's reveal animation as a numbered image sequence.

    Examples:
      # 10 seconds of 1080p PNG frames at 30 fps
      route-replay routes.json --route-id morning-run

      # Transparent WebP frames with the other routes as context
      route-replay routes.json --format webp --transparent --static-routes
    """
    try:
        init_logging(log_level, console=err_console)

        settings = _build_settings(resolution, fps, duration)
        routes = _load_routes(routes_file)
        route = _select_route(routes, route_id)
        style = StyleConfig.transparent() if transparent else StyleConfig.default()
        if color:
            style = style.with_route_color(color)

        state = RenderState(
            route=route,
            style=style,
            static_routes=tuple(routes) if static_routes else (),
            debug=debug,
        )
        output_dir = out or default_output_name(f"route-replay-{route.id}")
        _export(settings, state, routes if static_routes else [route], viewport, output_dir, frame_format, max_frames)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _build_settings(resolution: str, fps: int, duration: float) -> ExportSettings:
    """Parse and validate export settings."""
    try:
        settings = ExportSettings.from_resolution(resolution, fps, duration)
        validate_settings(settings).raise_for_errors()
    except ValidationError as e:
        raise CLIError(f"Invalid export settings: {e}")
    return settings


def _load_routes(file_path: str) -> list[Route]:
    """Load routes from a JSON file."""
    console.print(f"[bold blue]Loading routes from {file_path}...[/bold blue]")
    try:
        routes = load_routes(file_path)
    except FileNotFoundError:
        raise CLIError(f"File '{file_path}' not found")
    except ValueError as e:
        # json.JSONDecodeError and ValidationError are both ValueErrors
        raise CLIError(f"Invalid route data in '{file_path}': {e}")
    if not routes:
        raise CLIError(f"No routes found in '{file_path}'")
    return routes


def _select_route(routes: list[Route], route_id: str | None) -> Route:
    if route_id is None:
        return routes[0]
    for route in routes:
        if route.id == route_id:
            return route
    available = ", ".join(route.id for route in routes)
    raise CLIError(f"Unknown route '{route_id}'. Available: {available}")


def _export(
    settings: ExportSettings,
    state: RenderState,
    routes_to_fit: list[Route],
    viewport: str,
    output_dir: str,
    frame_format: str,
    max_frames: int | None,
) -> None:
    """Render the frame sequence into ``output_dir``."""
    try:
        viewport_width, viewport_height = parse_resolution(viewport)
        region, map_viewport = plan_headless_capture(
            routes_to_fit, settings.aspect_ratio, viewport_width, viewport_height
        )
        sink = resolve_frame_sink(output_dir, frame_format)
    except ValueError as e:
        raise CLIError(str(e))

    console.print(
        f"\n[bold blue]Rendering {state.route.name or state.route.id} "
        f"at {settings.width}x{settings.height}, {settings.frame_rate} fps...[/bold blue]"
    )

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Frames", total=None)
        pipeline: ExportPipeline

        def on_progress(update: ExportProgress) -> None:
            progress.update(task, completed=update.frames_written, total=update.total_frames)
            if max_frames is not None and update.frames_written >= max_frames:
                pipeline.cancel()

        pipeline = ExportPipeline(sink, on_progress=on_progress)
        try:
            result = pipeline.run(settings, region, map_viewport, state)
        except RasterizationError as e:
            raise CLIError(f"Failed to render frames: {e}")

    _report(result, output_dir, pipeline.renderer.total_skipped_points)


def _report(result: ExportResult, output_dir: str, skipped_points: int) -> None:
    if result.cancelled:
        console.print(
            f"[yellow]Stopped after {result.frames_written}/{result.total_frames} frames[/yellow]"
        )
    else:
        console.print(f"[green]✓[/green] {result.frames_written} frames saved to {output_dir}")
    if skipped_points:
        console.print(f"[yellow]Warning:[/yellow] skipped {skipped_points} invalid coordinates")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
