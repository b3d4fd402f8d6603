from typing import List, Optional

import typer

from experiments.meds import DEFAULT_ATTRIBUTES, run_meds
from experiments.report import format_correlations, format_frame
from experiments.screen_time import run_screen_time
from src.metrics.diversity import explanation_frame

app = typer.Typer()


@app.command("screen-time")
def screen_time(
    days: int = typer.Option(10, "--days", help="Number of days to simulate."),
    seed: Optional[int] = typer.Option(123, "--seed", help="Random seed for the example table."),
    shannon_base: float = typer.Option(
        2.0,
        "--shannon-base",
        help="Log base for Shannon entropy (2 = bits, 2.718... = nats).",
        show_default=True,
    ),
    normalize: bool = typer.Option(True, help="Divide Shannon by log_base(k)."),
    weighted: bool = typer.Option(True, help="Also compute the intensity-weighted run."),
    keep_diagnostics: bool = typer.Option(True, help="Show group totals and k for the weighted run."),
    show_data: bool = typer.Option(False, "--show-data", help="Print the generated table."),
) -> None:
    """
    Diversity of device usage per day on a simulated screen-time table.
    """
    try:
        report = run_screen_time(
            n_days=days,
            seed=seed,
            shannon_base=shannon_base,
            normalize_shannon=normalize,
            weighted=weighted,
            keep_diagnostics=keep_diagnostics,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if show_data:
        print(format_frame(report.data, title="Screen time"))
        print()
    print(format_frame(report.unweighted, title="Unweighted indices"))
    if report.weighted is not None:
        print()
        print(format_frame(report.weighted, title="Weighted indices"))
    if report.correlations:
        print()
        print("Correlations between indices (unweighted)")
        print(format_correlations(report.correlations))


@app.command()
def meds(
    attribute: List[str] = typer.Option(
        list(DEFAULT_ATTRIBUTES),
        "--attribute",
        help="Pill attributes to measure diversity over.",
        show_default=True,
    ),
    shannon_base: float = typer.Option(2.0, "--shannon-base", help="Log base for Shannon entropy."),
    normalize: bool = typer.Option(True, help="Divide Shannon by log_base(k)."),
) -> None:
    """
    Diversity of pill colors and shapes per person.
    """
    try:
        tables = run_meds(attributes=attribute, shannon_base=shannon_base, normalize_shannon=normalize)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    for name, table in tables.items():
        print(format_frame(table, title=f"{name.capitalize()} diversity"))
        print()


@app.command()
def explain() -> None:
    """
    Print a plain-language description of each index.
    """
    for row in explanation_frame().itertuples(index=False):
        print(row.index_name)
        print(f"  {row.plain_language_description}")
        print(f"  Example: {row.example_framing}")
        print(f"  Range: {row.typical_range}")
        print()


if __name__ == "__main__":
    app()
