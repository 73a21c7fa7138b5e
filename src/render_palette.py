import json
import logging
import urllib.parse
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from color_utils import int_from_hex, lstar_from_int
from material_you import generate_palette_from_color, get_material_you_palette
from monet_palette import ROLES, STYLES, MaterialYouPalette
from palette_settings import load_settings
from shades import RAMP_LENGTH

ROLE_LABELS = {
    "accent1": "Accent 1",
    "accent2": "Accent 2",
    "accent3": "Accent 3",
    "neutral1": "Neutral 1",
    "neutral2": "Neutral 2",
}

SHADE_LABELS = [str(i) for i in range(RAMP_LENGTH)]

# ============================================================
# Terminal rendering
# ============================================================


def render_table(palette: MaterialYouPalette, title: str) -> None:
    console = Console()
    table = Table(title=title)

    table.add_column("Shade", style="cyan", no_wrap=True)
    for role in ROLES:
        table.add_column(ROLE_LABELS[role], no_wrap=True)

    for i, shade in enumerate(SHADE_LABELS):
        cells = []
        for role in ROLES:
            h = palette.ramp(role)[i]
            sw = Text("   ", style=Style(bgcolor=h))
            cells.append(sw + Text(f" {h}"))
        table.add_row(shade, *cells)

    console.print(table)


# ============================================================
# File outputs
# ============================================================


def svg_swatch(hex_color: str) -> str:
    svg = f"""
<svg xmlns='http://www.w3.org/2000/svg' width='48' height='16'>
  <rect width='48' height='16' rx='4' ry='4' fill='{hex_color}' />
</svg>
""".strip()

    encoded = urllib.parse.quote(svg)
    return f'<img src="data:image/svg+xml;utf8,{encoded}" />'


def render_markdown(palette: MaterialYouPalette, seed: str, style: str) -> str:
    rows = []
    for role in ROLES:
        for shade, hex_color in zip(SHADE_LABELS, palette.ramp(role)):
            rows.append(
                "<tr>"
                f"<td><code>{role}</code></td>"
                f"<td>{shade}</td>"
                f"<td><code>{hex_color}</code></td>"
                f"<td>{lstar_from_int(int_from_hex(hex_color)):.1f}</td>"
                f"<td>{svg_swatch(hex_color)}</td>"
                "</tr>"
            )

    return "\n".join(
        [
            f"# Palette {seed} ({style})",
            "",
            "<table>",
            "<thead>",
            "<tr><th>Role</th><th>Shade</th><th>Hex</th><th>L*</th><th>Preview</th></tr>",
            "</thead>",
            "<tbody>",
            *rows,
            "</tbody>",
            "</table>",
            "",
        ]
    )


def write_outputs(
    palette: MaterialYouPalette,
    seed: str,
    style: str,
    out_json: Optional[Path],
    out_csv: Optional[Path],
    out_md: Optional[Path],
) -> None:
    if out_json is not None:
        out_json.parent.mkdir(parents=True, exist_ok=True)
        payload = {"seed": seed, "style": style, "palette": palette.as_dict()}
        out_json.write_text(json.dumps(payload, indent=2))
        click.echo(f"✓ Wrote {out_json}")

    if out_csv is not None:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        df = palette.to_frame()
        df["lstar"] = df["hex"].map(lambda h: round(lstar_from_int(int_from_hex(h)), 2))
        df.to_csv(out_csv, index=False)
        click.echo(f"✓ Wrote {out_csv} ({len(df)} rows)")

    if out_md is not None:
        out_md.parent.mkdir(parents=True, exist_ok=True)
        out_md.write_text(render_markdown(palette, seed, style))
        click.echo(f"✓ Wrote {out_md}")


# ============================================================
# CLI
# ============================================================


def validate_seed(ctx, param, value):
    if value is None:
        return value
    text = value.strip()
    digits = text[1:] if text.startswith("#") else text
    if len(digits) != 6 or any(ch not in "0123456789abcdefABCDEF" for ch in digits):
        raise click.BadParameter("seed must look like #RRGGBB")
    return f"#{digits.lower()}"


@click.command()
@click.option(
    "--seed",
    default=None,
    callback=validate_seed,
    help="Seed color as #RRGGBB (default: from --config, else the fallback seed).",
)
@click.option(
    "--style",
    type=click.Choice(STYLES, case_sensitive=False),
    default=None,
    help="Generation style (default: from --config, else TONAL_SPOT).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with seed / style / fallback_seed.",
)
@click.option("--out-json", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--out-csv", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option(
    "--out-md",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Markdown table with GitHub-safe SVG swatches.",
)
@click.option("--no-render", is_flag=True, default=False, help="Disable rich table output.")
@click.option("--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
def main(
    seed: Optional[str],
    style: Optional[str],
    config_path: Optional[Path],
    out_json: Optional[Path],
    out_csv: Optional[Path],
    out_md: Optional[Path],
    no_render: bool,
    verbose: bool,
):
    """
    Generate a Material You palette from a seed color.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        settings = load_settings(config_path).override(
            seed=seed, style=style.upper() if style else None
        )
    except ValueError as exc:
        raise click.ClickException(f"Invalid config {config_path}: {exc}")

    if settings.seed is None:
        seed = settings.fallback_seed
        palette = get_material_you_palette(settings.fallback_seed, settings.style)
    else:
        seed = settings.seed
        palette = generate_palette_from_color(seed, settings.style)

    if not no_render:
        render_table(palette, f"{seed} · {settings.style}")

    write_outputs(palette, seed, settings.style, out_json, out_csv, out_md)


if __name__ == "__main__":
    main()
