#! /usr/bin/env -S python3 -B

"""Extract the numbers from a text file and show their median and average, per line and overall."""

import os
import argparse
import logging
from typing import List, Optional

import numpy as np
from matplotlib import pyplot as plt

from sequence_statistics.descriptive_statistics import Summary, summarize
from sequence_statistics.number_extraction import parse_grid
from sequence_statistics.setup_logging import setup_logging

logger = logging.getLogger(__name__)


def summarize_grid(grid: List[List[float]]) -> List[Summary]:
    """Summarize each row of the grid, followed by a summary of all values together."""
    summaries = [summarize(row) for row in grid]
    summaries.append(summarize([value for row in grid for value in row]))
    return summaries


def format_summary(label: str, summary: Summary) -> str:
    return "{:>8} | count {:6d} | min {:12.6g} | max {:12.6g} | median {:12.6g} | average {:12.6g}".format(
        label, summary.count, summary.minimum, summary.maximum, summary.median, summary.average)


def plot_grid(grid: List[List[float]], output_filename: Optional[str], output_dpi: Optional[int]) -> None:
    """Plot every non-empty row against its position, with the row medians and averages in a second panel."""

    plt.clf()

    plt.gcf().set_size_inches(16, 9)

    plt.subplots_adjust(hspace=0.4)

    rows = [(row_nr, np.array(row)) for (row_nr, row) in enumerate(grid, 1) if len(row) > 0]

    plt.subplot(211)
    plt.xlabel("position in line")
    plt.ylabel("value")
    plt.grid()
    for (row_nr, values) in rows:
        plt.plot(np.arange(1, len(values) + 1), values, '.-', label="line {}".format(row_nr))
    if 0 < len(rows) <= 10:
        plt.legend()

    row_numbers = np.array([row_nr for (row_nr, values) in rows])

    plt.subplot(212)
    plt.xlabel("line")
    plt.ylabel("value")
    plt.grid()
    plt.plot(row_numbers, [np.median(values) for (row_nr, values) in rows], 'o', label="median")
    plt.plot(row_numbers, [np.mean(values) for (row_nr, values) in rows], 'x', label="average")
    plt.legend()

    if output_filename is None:
        plt.show()
    else:
        plt.savefig(output_filename, dpi=output_dpi)


def show_text_statistics(input_filename: str, plot: bool, output_filename: Optional[str], output_dpi: Optional[int]) -> None:

    if not os.path.exists(input_filename):
        logger.critical("Input file '%s' not found! Unable to continue.", input_filename)
        return

    with open(input_filename, "r", encoding="utf-8") as fi:
        grid = parse_grid(fi.read())

    logger.info("Read %d lines with %d numbers from '%s'.", len(grid), sum(len(row) for row in grid), input_filename)

    summaries = summarize_grid(grid)

    for (row_nr, summary) in enumerate(summaries[:-1], 1):
        if summary.count > 0:
            print(format_summary("line {}".format(row_nr), summary))

    print(format_summary("all", summaries[-1]))

    if plot or output_filename is not None:
        plot_grid(grid, output_filename, output_dpi)


def main():

    parser = argparse.ArgumentParser(description="Show median and average of the numbers found in a text file.")

    parser.add_argument("input_filename", type=str, help="text file to read numbers from")
    parser.add_argument("--plot", action="store_true", help="show a plot of the numbers")
    parser.add_argument("-o", dest="output_filename", type=str, help="write the plot to this file instead of showing it")
    parser.add_argument("--dpi", dest="output_dpi", type=int, help="Output file dots-per-inch")

    args = parser.parse_args()

    with setup_logging():
        logging.getLogger("matplotlib").setLevel(logging.WARNING)
        show_text_statistics(args.input_filename, args.plot, args.output_filename, args.output_dpi)


if __name__ == "__main__":
    main()
