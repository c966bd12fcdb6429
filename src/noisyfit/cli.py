from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from noisyfit.config import ConfigError, RunConfig, normalize_size, read_config_values
from noisyfit.core.logs import get_logger
from noisyfit.pipeline import run
from noisyfit.report import format_report
from noisyfit.training.progress import ConsoleProgress

app = typer.Typer(add_completion=False)


def _ask_size() -> int:
    while True:
        value = typer.prompt("data_set size", type=float)
        try:
            return normalize_size(value)
        except ConfigError:
            typer.echo("please provide a non-null positive size!")


def _ask_missing(values: dict) -> dict:
    """Prompt for whatever the flags and config file left out."""
    if values.get("w") is None or values.get("b") is None:
        typer.echo("Please enter the weight and bias parameter to generate the data set")
    if values.get("w") is None:
        values["w"] = typer.prompt("weight parameter", type=float)
    if values.get("b") is None:
        values["b"] = typer.prompt("bias parameter", type=float)
    if values.get("noise_range") is None:
        typer.echo("Now enter the noise desired for the parameter (as a float, put 0 for disabling noise)")
        values["noise_range"] = typer.prompt("noise", type=float)
    if values.get("size") is None:
        typer.echo("Last step, can you please provide the data set size")
        values["size"] = _ask_size()
    return values


@app.command()
def main(
    w: Optional[float] = typer.Option(None, "--w", help="weight used to generate the data set"),
    b: Optional[float] = typer.Option(None, "--b", help="bias used to generate the data set"),
    noise: Optional[float] = typer.Option(None, "--noise", help="noise range, 0 disables noise"),
    size: Optional[float] = typer.Option(None, "--size", help="data set size (capped at 1e9)"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML file with run settings"),
    seed: Optional[int] = None,
    learning_rate: Optional[float] = None,
    chunk_size: Optional[int] = None,
    stream: Optional[bool] = typer.Option(None, "--stream/--in-memory", help="generate data chunk by chunk"),
    quiet: bool = typer.Option(False, "--quiet", help="no training progress"),
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
):
    flags = dict(
        w=w, b=b, noise_range=noise, size=size, seed=seed,
        learning_rate=learning_rate, chunk_size=chunk_size, stream=stream,
        log_level=log_level, log_file=log_file,
    )
    try:
        values = read_config_values(config) if config is not None else {}
        values.update({k: v for k, v in flags.items() if v is not None})
        get_logger("noisyfit", values.get("log_level", "INFO"), values.get("log_file"))
        values = _ask_missing(values)
        if quiet:
            values["verbose"] = False
        cfg = RunConfig.from_dict(values)
    except (ConfigError, FileNotFoundError) as e:
        raise typer.BadParameter(str(e)) from e

    typer.echo("Generating the data set ...")
    progress = ConsoleProgress(sys.stdout) if cfg.verbose else None
    report = run(cfg, callback=progress, on_phase=typer.echo)

    for line in format_report(report):
        typer.echo(line)


if __name__ == "__main__":
    app()
