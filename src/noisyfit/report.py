from __future__ import annotations

from typing import List

from noisyfit.pipeline import RunReport

WIDTH = 50


def format_count(n: int) -> str:
    """Thousands grouped with spaces: 1000000 -> '1 000 000'."""
    return f"{n:,}".replace(",", " ")


def _title(name: str) -> str:
    return f"\n[{' ' + name + ' ':=^{WIDTH}}]"


def _line(text: str) -> str:
    return f"{text:^{WIDTH}}"


def format_report(r: RunReport) -> List[str]:
    out = [_title("Data Set")]
    out += [
        _line(f"data_set size: {format_count(r.size)}"),
        _line(f"training_set size: {format_count(r.train_size)}"),
        _line(f"testing_set size: {format_count(r.test_size)}"),
        _line(f"data_set w: {r.true_w}"),
        _line(f"data_set b: {r.true_b}"),
        _line(f"data_set input range: [{r.input_min} ; {r.input_max}]"),
        _line(f"data_set noise range: [-{r.noise_range} ; {r.noise_range}]"),
    ]
    out.append(_title("Parameters"))
    out += [
        _line(f"w: {r.initial_w:.5f}"),
        _line(f"b: {r.initial_b:.5f}"),
        _line(f"learning_rate: {r.learning_rate:.5f}"),
        _line(f"data_chunk: {r.chunk_size}"),
    ]
    out.append(_title("Results"))
    out += [
        _line(f"w [TRAINED]: {r.w:.5f} (distance : {r.w_distance:.5f})"),
        _line(f"b [TRAINED]: {r.b:.5f} (distance : {r.b_distance:.5f})"),
        _line(f"cost: {r.test_cost}"),
        _line(f"avr_error: {r.test_error:.8f}"),
        _line(f"training time: {r.train_seconds:.3f}s"),
    ]
    return out
