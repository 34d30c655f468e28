#!/usr/bin/env python3
# Copyright    2024  Xiaomi Corp.        (authors: Wei Kang)
#
# See ../../LICENSE for clarification regarding multiple authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Print the most frequent repeated substrings of a text file, scored by
frequency times length, the way seed vocabularies of subword tokenizers are
ranked.

Usage:

  ./examples/vocab/count_substrings.py --text corpus.txt --num-pieces 100
"""

import argparse
import logging
from pathlib import Path

from textesa import setup_logger, suffix


def get_args():
    parser = argparse.ArgumentParser()

    parser.add_argument(
        "--text",
        type=Path,
        required=True,
        help="Path to a utf-8 encoded text file.",
    )

    parser.add_argument(
        "--num-pieces",
        type=int,
        default=50,
        help="The number of substrings to print.",
    )

    parser.add_argument(
        "--min-length",
        type=int,
        default=2,
        help="Substrings shorter than this are skipped.",
    )

    parser.add_argument(
        "--backend",
        type=str,
        default=None,
        choices=["python", "native"],
        help="The backend to build the suffix array with. "
        "Defaults to the TEXTESA_BACKEND environment variable.",
    )

    parser.add_argument(
        "--log-dir",
        type=Path,
        default=Path("exp/log"),
        help="The directory to save the log in.",
    )

    return parser.parse_args()


def main():
    args = get_args()
    setup_logger(f"{args.log_dir}/count-substrings")
    logging.info(vars(args))

    assert args.text.is_file(), f"No such file: {args.text}"
    text = args.text.read_text(encoding="utf-8")

    logging.info(f"Building the suffix array of {len(text)} characters.")
    esa = suffix(text, backend=args.backend)
    logging.info(f"Found {esa.node_num} repeated substrings.")

    pieces = [
        (freq * len(piece), piece, freq)
        for piece, freq in esa
        if len(piece) >= args.min_length and "\n" not in piece
    ]
    pieces.sort(key=lambda x: (-x[0], x[1]))

    for score, piece, freq in pieces[: args.num_pieces]:
        print(f"{piece!r}\t{freq}\t{score}")

    logging.info("Done.")


if __name__ == "__main__":
    main()
