"""Text rendering of simulation results."""

from __future__ import annotations

from typing import Mapping


def format_amplitude(amplitude: complex, precision: int = 5) -> str:
    """
    Render an amplitude as ``<sign><|re|> <+|-> i<|im|>``.

    A positive real part is padded with a space so columns line up.

    >>> format_amplitude(complex(-0.5, 0.25), precision=2)
    '-0.50 + i0.25'
    """
    re, im = amplitude.real, amplitude.imag
    re_sign = " " if re >= 0 else "-"
    im_sign = "+" if im >= 0 else "-"
    return f"{re_sign}{abs(re):.{precision}f} {im_sign} i{abs(im):.{precision}f}"


def format_result(result: Mapping[str, complex], precision: int = 5) -> list[str]:
    """One line per basis label, sorted lexicographically."""
    return [
        f"|{label}⟩: {format_amplitude(result[label], precision)}"
        for label in sorted(result)
    ]


def display_result(result: Mapping[str, complex], precision: int = 5) -> None:
    """Print a result mapping."""
    for line in format_result(result, precision):
        print(line)
