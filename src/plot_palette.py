from pathlib import Path

import click
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from material_you import generate_palette_from_color
from monet_palette import ROLES, STYLES
from shades import RAMP_LENGTH

ROLE_LABELS = {
    "accent1": "Accent 1",
    "accent2": "Accent 2",
    "accent3": "Accent 3",
    "neutral1": "Neutral 1",
    "neutral2": "Neutral 2",
}

# ------------------------------------------------------------
# Plot
# ------------------------------------------------------------


def plot_palettes(seed: str, styles: list[str], out_png: Path) -> None:
    """
    One panel per style: five rows of swatches, lightest shade on the left.
    """
    fig, axes = plt.subplots(
        nrows=len(styles),
        ncols=1,
        figsize=(RAMP_LENGTH * 0.8, 2.6 * len(styles)),
        squeeze=False,
    )

    for ax, style in zip(axes[:, 0], styles):
        palette = generate_palette_from_color(seed, style)

        for row, role in enumerate(ROLES):
            for col, hex_color in enumerate(palette.ramp(role)):
                ax.add_patch(
                    Rectangle(
                        (col, len(ROLES) - 1 - row),
                        1,
                        1,
                        facecolor=hex_color,
                        edgecolor="white",
                        linewidth=0.5,
                    )
                )

        ax.set_xlim(0, RAMP_LENGTH)
        ax.set_ylim(0, len(ROLES))
        ax.set_yticks([len(ROLES) - 0.5 - i for i in range(len(ROLES))])
        ax.set_yticklabels([ROLE_LABELS[r] for r in ROLES])
        ax.set_xticks([i + 0.5 for i in range(RAMP_LENGTH)])
        ax.set_xticklabels([str(i) for i in range(RAMP_LENGTH)])
        ax.set_title(style, loc="left", fontsize=11, pad=6)
        ax.tick_params(length=0)
        for spine in ax.spines.values():
            spine.set_visible(False)

    fig.suptitle(f"Material You palettes for {seed}", y=0.99)

    plt.tight_layout(rect=[0, 0, 1, 0.97])
    out_png.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_png, dpi=150)
    plt.close(fig)

    click.echo(f"Wrote {out_png}")


# ------------------------------------------------------------
# CLI
# ------------------------------------------------------------


@click.command()
@click.option("--seed", default="#1b6ef3", show_default=True, help="Seed color as #RRGGBB.")
@click.option(
    "--styles",
    default=",".join(STYLES),
    help="Comma-separated styles to plot (default: all).",
)
@click.option(
    "--out",
    "out_png",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output PNG path.",
)
def main(seed: str, styles: str, out_png: Path):
    """
    Plot the tonal ramps of one seed color across styles.
    """
    order = [s.strip().upper() for s in styles.split(",") if s.strip()]
    unknown = [s for s in order if s not in STYLES]
    if unknown:
        raise click.BadParameter(f"unknown style(s): {', '.join(unknown)}", param_hint="--styles")
    if not order:
        raise click.BadParameter("no styles given", param_hint="--styles")
    plot_palettes(seed, order, out_png)


if __name__ == "__main__":
    main()
