from __future__ import annotations

import math
import pathlib

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from toroidal._config import get_build_settings
from toroidal.cache import default_cache
from toroidal.io import save_buffers, write_stl
from toroidal.layers import DECOMPOSITION_LAYERS, build_layers, get_layer
from toroidal.mesh import MeshBuffer, analyze_mesh
from toroidal.modeling.torus import SurfaceParameters, build_torus_mesh
from toroidal.validation import InvalidParameterError

console = Console()
app = typer.Typer(help="Generate torus and band meshes for toroidal splitting scenes.")

EXPORT_SUFFIXES = (".stl", ".npz")
DEFAULT_MAJOR_RADIUS = 6 / 5
DEFAULT_MINOR_RADIUS = 1 / 3


def _width_option():
    return typer.Option(None, "--width-segments", help="Subdivisions around the longitude (default from config).")


def _height_option():
    return typer.Option(None, "--height-segments", help="Subdivisions around the tube (default from config).")


def _major_option():
    return typer.Option(DEFAULT_MAJOR_RADIUS, "--major-radius", "-R", help="Distance from the axis to the tube center.")


def _minor_option():
    return typer.Option(DEFAULT_MINOR_RADIUS, "--minor-radius", "-r", help="Tube radius.")


def _angle_option(default: float, flag: str, help_text: str):
    return typer.Option(default, flag, help=f"{help_text} in degrees.")


def _surface_parameters(
    width_segments: int | None,
    height_segments: int | None,
    major_radius: float,
    minor_radius: float,
    meridian_start: float,
    meridian_length: float,
    longitude_start: float,
    longitude_length: float,
) -> SurfaceParameters:
    settings = get_build_settings()
    try:
        return SurfaceParameters(
            width_segments=settings.width_segments if width_segments is None else width_segments,
            height_segments=settings.height_segments if height_segments is None else height_segments,
            major_radius=major_radius,
            minor_radius=minor_radius,
            meridian_start=math.radians(meridian_start),
            meridian_length=math.radians(meridian_length),
            longitude_start=math.radians(longitude_start),
            longitude_length=math.radians(longitude_length),
        )
    except InvalidParameterError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def _export(mesh: MeshBuffer, output: pathlib.Path, overwrite: bool, ascii: bool) -> pathlib.Path:
    suffix = output.suffix.lower()
    if suffix not in EXPORT_SUFFIXES:
        raise typer.BadParameter(f"Unsupported output type '{output.suffix}'. Use one of: {', '.join(EXPORT_SUFFIXES)}.")

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    final_output.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".stl":
        write_stl(mesh, final_output, ascii=ascii)
    else:
        save_buffers(mesh, final_output)
    return final_output


def _describe(params: SurfaceParameters, mesh: MeshBuffer) -> str:
    xmin, xmax, ymin, ymax, zmin, zmax = mesh.bounds
    sweep = "closed" if params.closed_meridian and params.closed_longitude else "band"
    lines = [
        f"Grid: {params.width_segments} x {params.height_segments} ({sweep})",
        f"Radii: R={params.major_radius:.4g}, r={params.minor_radius:.4g}",
        f"Vertices: {mesh.n_vertices}  Triangles: {mesh.n_triangles}",
        f"Normals: {'yes' if mesh.has_normals else 'no'}",
        f"Bounds: x[{xmin:.3f}, {xmax:.3f}] y[{ymin:.3f}, {ymax:.3f}] z[{zmin:.3f}, {zmax:.3f}]",
    ]
    return "\n".join(lines)


@app.command()
def build(
    output: pathlib.Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional .stl or .npz file to write the mesh to.",
    ),
    width_segments: int | None = _width_option(),
    height_segments: int | None = _height_option(),
    major_radius: float = _major_option(),
    minor_radius: float = _minor_option(),
    meridian_start: float = _angle_option(0.0, "--meridian-start", "Start of the tube sweep"),
    meridian_length: float = _angle_option(360.0, "--meridian-length", "Length of the tube sweep"),
    longitude_start: float = _angle_option(0.0, "--longitude-start", "Start of the longitude sweep"),
    longitude_length: float = _angle_option(360.0, "--longitude-length", "Length of the longitude sweep"),
    normals: bool = typer.Option(True, "--normals/--no-normals", help="Compute smooth vertex normals."),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing output file."),
    ascii: bool = typer.Option(False, "--ascii", help="Write ASCII STL instead of binary."),
) -> None:
    """
    Build one torus or band and optionally export its buffers.
    """

    params = _surface_parameters(
        width_segments,
        height_segments,
        major_radius,
        minor_radius,
        meridian_start,
        meridian_length,
        longitude_start,
        longitude_length,
    )
    mesh = build_torus_mesh(params, compute_normals=normals)
    if params.self_intersecting:
        console.print("[yellow]Minor radius >= major radius; the surface self-intersects.[/yellow]")

    body = _describe(params, mesh)
    if output is not None:
        written = _export(mesh, output, overwrite=overwrite, ascii=ascii)
        body += f"\nWrote [green]{written}[/green]"
    console.print(Panel(body, title="Surface built", border_style="green"))


@app.command()
def info(
    layer: str | None = typer.Option(None, "--layer", "-l", help="Analyze a named decomposition layer; only segment counts may be overridden."),
    width_segments: int | None = _width_option(),
    height_segments: int | None = _height_option(),
    major_radius: float = _major_option(),
    minor_radius: float = _minor_option(),
    meridian_start: float = _angle_option(0.0, "--meridian-start", "Start of the tube sweep"),
    meridian_length: float = _angle_option(360.0, "--meridian-length", "Length of the tube sweep"),
    longitude_start: float = _angle_option(0.0, "--longitude-start", "Start of the longitude sweep"),
    longitude_length: float = _angle_option(360.0, "--longitude-length", "Length of the longitude sweep"),
) -> None:
    """
    Build a surface and report its structural analysis.
    """

    if layer is not None:
        try:
            item = get_layer(layer)
        except KeyError as exc:
            raise typer.BadParameter(str(exc.args[0])) from exc
        shape_options = (major_radius, minor_radius, meridian_start, meridian_length, longitude_start, longitude_length)
        if shape_options != (DEFAULT_MAJOR_RADIUS, DEFAULT_MINOR_RADIUS, 0.0, 360.0, 0.0, 360.0):
            raise typer.BadParameter("--layer fixes the radii and sweep; only segment counts can be overridden.")
        settings = get_build_settings()
        try:
            params = item.at_resolution(
                settings.width_segments if width_segments is None else width_segments,
                settings.height_segments if height_segments is None else height_segments,
            )
        except InvalidParameterError as exc:
            raise typer.BadParameter(str(exc)) from exc
    else:
        params = _surface_parameters(
            width_segments,
            height_segments,
            major_radius,
            minor_radius,
            meridian_start,
            meridian_length,
            longitude_start,
            longitude_length,
        )

    mesh = build_torus_mesh(params, compute_normals=False)
    analysis = analyze_mesh(mesh)

    table = Table(title="Mesh analysis")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Vertices", str(analysis.n_vertices))
    table.add_row("Triangles", str(analysis.n_faces))
    table.add_row("Degenerate faces", str(analysis.degenerate_faces))
    table.add_row("Boundary edges", str(analysis.boundary_edges))
    table.add_row("Non-manifold edges", str(analysis.nonmanifold_edges))
    table.add_row("Seam duplicates", str(analysis.coincident_vertices))
    console.print(table)

    issues = analysis.issues()
    if issues:
        console.print("[yellow]" + "; ".join(issues) + "[/yellow]")
    if analysis.has_seams:
        console.print("[cyan]Seam vertices are kept distinct for UV wrapping.[/cyan]")


@app.command()
def layers(
    output_dir: pathlib.Path | None = typer.Option(
        None,
        "--output-dir",
        "-d",
        help="Write every layer to this directory.",
    ),
    fmt: str = typer.Option("npz", "--format", "-f", help="Export format: npz or stl."),
) -> None:
    """
    List the surfaces of the toroidal splitting scene.
    """

    suffix = f".{fmt.lower().lstrip('.')}"
    if suffix not in EXPORT_SUFFIXES:
        raise typer.BadParameter(f"Unsupported format '{fmt}'. Use npz or stl.")

    settings = get_build_settings()
    table = Table(title="Decomposition layers")
    table.add_column("Layer")
    table.add_column("R", justify="right")
    table.add_column("r", justify="right")
    table.add_column("Grid", justify="right")
    table.add_column("Description")
    for item in DECOMPOSITION_LAYERS:
        params = item.at_resolution(settings.width_segments, settings.height_segments)
        table.add_row(
            item.name,
            f"{params.major_radius:.4g}",
            f"{params.minor_radius:.4g}",
            f"{params.width_segments}x{params.height_segments}",
            item.hint,
        )
    console.print(table)

    if output_dir is None:
        return

    output_dir.mkdir(parents=True, exist_ok=True)
    meshes = build_layers(
        cache=default_cache(),
        width_segments=settings.width_segments,
        height_segments=settings.height_segments,
    )
    for name, mesh in meshes.items():
        written = _export(mesh, output_dir / f"{name}{suffix}", overwrite=True, ascii=False)
        console.print(f"Wrote [green]{written}[/green]")
