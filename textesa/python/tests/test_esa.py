#!/usr/bin/env python3
#
# Copyright      2023  Xiaomi Corp.       (authors: Wei Kang)
#
# See ../../../LICENSE for clarification regarding multiple authors
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

# To run this single test, use
#
#  pytest -v textesa/python/tests/test_esa.py

import random
import unittest

import numpy as np

from textesa import ALPHABET_SIZE
from textesa import InvalidLengthError
from textesa import create_suffix_array
from textesa import esaxx
from textesa import suffix
from textesa import suffixtree
from textesa import text_to_symbols
from textesa.esa import compute_height


def _buffers(n, size=None):
    size = n if size is None else size
    return [np.zeros(size, dtype=np.int64) for _ in range(4)]


def check_nodes(test, seq, sa, left, right, depth, node_num):
    """Check every node is a maximal interval of suffixes sharing exactly
    `depth` leading symbols.

    The root (0, n, 0) is exempt from maximality: it is kept even when all
    suffixes share a first symbol, e.g. for "aa"."""
    n = len(seq)
    test.assertLessEqual(node_num, n)
    for i in range(node_num):
        l, r, d = int(left[i]), int(right[i]), int(depth[i])
        test.assertTrue(0 <= l < r <= n, (l, r))
        prefix = seq[sa[l] : sa[l] + d]
        test.assertEqual(len(prefix), d)
        for k in range(l, r):
            test.assertEqual(seq[sa[k] : sa[k] + d], prefix)

        if d == 0 and l == 0 and r == n:
            continue

        # Cannot be extended to the right...
        if r - l > 1:
            extended = {tuple(seq[sa[k] : sa[k] + d + 1]) for k in range(l, r)}
            test.assertGreater(len(extended), 1)
        # ...nor to the sides
        if l > 0:
            test.assertNotEqual(seq[sa[l - 1] : sa[l - 1] + d], prefix)
        if r < n:
            test.assertNotEqual(seq[sa[r] : sa[r] + d], prefix)

    roots = [
        i
        for i in range(node_num)
        if depth[i] == 0 and left[i] == 0 and right[i] == n
    ]
    if n > 0:
        test.assertEqual(roots, [node_num - 1])
    else:
        test.assertEqual(node_num, 0)


class TestComputeHeight(unittest.TestCase):
    def test_abracadabra(self):
        s = text_to_symbols("abracadabra").tolist()
        sa = [10, 7, 0, 3, 5, 8, 1, 4, 6, 9, 2]
        plcp, height = compute_height(s, sa)
        self.assertEqual(plcp, [4, 3, 2, 1, 0, 1, 0, 1, 0, 0, 0])
        self.assertEqual(height, [0, 1, 4, 1, 1, 0, 3, 0, 0, 0, 2])

    def test_single_symbol(self):
        s = [5] * 4
        plcp, height = compute_height(s, [3, 2, 1, 0])
        self.assertEqual(height, [0, 1, 2, 3])


class TestEsaxx(unittest.TestCase):
    def test_abracadabra(self):
        array = text_to_symbols("abracadabra")
        sa, left, right, depth = _buffers(array.size)
        node_num = esaxx(array, sa, left, right, depth, ALPHABET_SIZE)
        self.assertEqual(node_num, 5)
        np.testing.assert_equal(sa, [10, 7, 0, 3, 5, 8, 1, 4, 6, 9, 2])
        np.testing.assert_equal(left, [1, 0, 5, 9, 0, 0, 3, 0, 0, 0, 2])
        np.testing.assert_equal(right, [3, 5, 7, 11, 11, 1, 0, 1, 0, 0, 0])
        np.testing.assert_equal(depth, [4, 1, 3, 2, 0, 0, 0, 0, 0, 0, 0])

    def test_empty(self):
        array = text_to_symbols("")
        sa, left, right, depth = _buffers(0)
        self.assertEqual(esaxx(array, sa, left, right, depth, ALPHABET_SIZE), 0)

    def test_single(self):
        array = text_to_symbols("x")
        sa, left, right, depth = _buffers(1)
        node_num = esaxx(array, sa, left, right, depth, ALPHABET_SIZE)
        self.assertEqual(node_num, 1)
        self.assertEqual((left[0], right[0], depth[0]), (0, 1, 0))

    def test_single_symbol(self):
        # Every suffix shares the first symbol, the nesting is maximal
        n = 8
        array = text_to_symbols("a" * n)
        sa, left, right, depth = _buffers(n)
        node_num = esaxx(array, sa, left, right, depth, ALPHABET_SIZE)
        self.assertEqual(node_num, n)
        self.assertEqual(depth[:node_num].tolist(), list(range(n - 1, -1, -1)))
        self.assertEqual(right[:node_num].tolist(), [n] * n)
        # "a" * d occurs n - d + 1 times, in the last n - d + 1 positions
        self.assertEqual(left[:node_num].tolist(), list(range(n - 2, -1, -1)) + [0])

    def test_root_shares_interval(self):
        # The root covers the same suffixes as "a" but is still reported
        self.assertEqual(list(suffix("aa")), [("a", 2), ("", 2)])
        self.assertEqual(list(suffix("aaa")), [("aa", 2), ("a", 3), ("", 3)])
        for s in ["aa", "aaa"]:
            array = text_to_symbols(s)
            sa, left, right, depth = _buffers(array.size)
            node_num = esaxx(array, sa, left, right, depth, ALPHABET_SIZE)
            check_nodes(self, s, sa.tolist(), left, right, depth, node_num)

    def test_invalid_length(self):
        array = text_to_symbols("banana")
        n = array.size
        for k in range(4):
            buffers = _buffers(n)
            buffers[k] = np.zeros(n + 1, dtype=np.int64)
            with self.assertRaises(InvalidLengthError):
                esaxx(array, *buffers, ALPHABET_SIZE)
            with self.assertRaises(InvalidLengthError):
                suffixtree(array, *buffers)

    def test_out_of_bounds_regression(self):
        s = "banana$band$$"
        array = text_to_symbols(s)
        sa, left, right, depth = _buffers(array.size)
        node_num = esaxx(array, sa, left, right, depth, ALPHABET_SIZE)
        check_nodes(self, s, sa.tolist(), left, right, depth, node_num)

    def test_random(self):
        rng = random.Random(7)
        for alphabet in ["ab", "abc", "acgt", "abcdefghij"]:
            for _ in range(40):
                n = rng.randint(1, 50)
                s = "".join(rng.choice(alphabet) for _ in range(n))
                array = text_to_symbols(s)
                sa, left, right, depth = _buffers(n)
                node_num = esaxx(array, sa, left, right, depth, ALPHABET_SIZE)
                self.assertGreater(node_num, 0)
                check_nodes(self, s, sa.tolist(), left, right, depth, node_num)

    def test_suffixtree_on_existing_suffix_array(self):
        array = np.array([2, 0, 1, 0, 1, 0], dtype=np.int32)
        sa = create_suffix_array(array)
        _, left, right, depth = _buffers(array.size)
        node_num = suffixtree(array, sa, left, right, depth)
        check_nodes(self, array.tolist(), sa.tolist(), left, right, depth, node_num)
        # "0", "01", "010" and the root
        self.assertEqual(
            sorted(zip(depth[:node_num].tolist(), (right - left)[:node_num].tolist())),
            [(0, 6), (1, 3), (2, 2), (3, 2)],
        )


if __name__ == "__main__":
    unittest.main()
