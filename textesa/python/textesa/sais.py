# Copyright      2023   Xiaomi Corp.       (author: Wei Kang)
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

"""
Linear time suffix sorting by induced sorting (SA-IS).

Reference:
  Ge Nong, Sen Zhang and Wai Hong Chan,
  "Two Efficient Algorithms for Linear Time Suffix Array Construction",
  IEEE Transactions on Computers, 2011.

The end of the sequence is treated as a virtual sentinel that is smaller than
every symbol, so a suffix sorts before every longer suffix it is a prefix of.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .errors import InvalidLengthError


def _renumbering(array: np.ndarray) -> np.ndarray:
    """Renumber elements in the input array such that the returned array
    contains entries ranging from 0 to M - 1, where M equals
    to number of unique entries in the input array.

    The relative order of entries is kept. That is, if array[i] < array[j],
    then ans[i] < ans[j].

    Args:
      array:
        A 1-D array.
    Returns:
      Return a renumbered 1-D array of dtype np.int64.
    """
    _, inverse = np.unique(array, return_inverse=True)
    # Note: uniqued[inverse] == array
    return inverse.reshape(-1).astype(np.int64)


def _bucket_starts(
    s: List[int], is_s: List[bool], alphabet_size: int
) -> Tuple[np.ndarray, np.ndarray]:
    """Return the bucket boundaries of each symbol.

    Returns:
      A tuple ``(sum_l, sum_s)``. ``sum_l[c]`` is the number of symbols less
      than ``c``, i.e., where the bucket of ``c`` begins; it has
      ``alphabet_size + 1`` entries so ``sum_l[c + 1]`` is where it ends.
      ``sum_s[c]`` is where the S-type part of the bucket of ``c`` begins.
      Both are np.int64 arrays.
    """
    symbols = np.asarray(s, dtype=np.int64)
    s_type = np.asarray(is_s, dtype=bool)

    count_l = np.bincount(symbols[~s_type], minlength=alphabet_size)
    count_s = np.bincount(symbols[s_type], minlength=alphabet_size)

    sum_l = np.zeros(alphabet_size + 1, dtype=np.int64)
    np.cumsum(count_l + count_s, out=sum_l[1:])
    sum_s = sum_l[:-1] + count_l
    return sum_l, sum_s


def _induce(
    s: List[int],
    is_s: List[bool],
    lms: List[int],
    sum_l: np.ndarray,
    sum_s: np.ndarray,
    sa: List[int],
) -> None:
    """Induce the order of all suffixes from the order of the LMS suffixes.

    ``lms`` is placed at the head of the S-type part of each bucket, the
    L-type suffixes are induced by a left to right scan and the S-type
    suffixes by a right to left scan. ``sa`` is overwritten, ``sum_l`` and
    ``sum_s`` are not.
    """
    n = len(s)
    sa[:] = [-1] * n

    buf = sum_s.copy()
    for d in lms:
        c = s[d]
        sa[buf[c]] = d
        buf[c] += 1

    buf = sum_l.copy()
    # The suffix n - 1 is preceded only by the virtual sentinel
    c = s[n - 1]
    sa[buf[c]] = n - 1
    buf[c] += 1
    for i in range(n):
        v = sa[i]
        if v >= 1 and not is_s[v - 1]:
            c = s[v - 1]
            sa[buf[c]] = v - 1
            buf[c] += 1

    buf = sum_l.copy()
    for i in range(n - 1, -1, -1):
        v = sa[i]
        if v >= 1 and is_s[v - 1]:
            c = s[v - 1] + 1
            buf[c] -= 1
            sa[buf[c]] = v - 1


def _sa_is(s: List[int], alphabet_size: int, level: int = 0) -> List[int]:
    """Compute the suffix array of ``s``.

    Args:
      s:
        The input sequence. Every entry is in ``[0, alphabet_size)``.
      alphabet_size:
        One past the largest symbol.
      level:
        Recursion level, only used for logging.
    Returns:
      Return the suffix array as a list.
    """
    n = len(s)
    if n == 0:
        return []
    if n == 1:
        return [0]
    if n == 2:
        return [0, 1] if s[0] < s[1] else [1, 0]

    # The last position is L-type since the virtual sentinel is smaller
    is_s = [False] * n
    for i in range(n - 2, -1, -1):
        if s[i] == s[i + 1]:
            is_s[i] = is_s[i + 1]
        else:
            is_s[i] = s[i] < s[i + 1]

    # lms_map[i] is the index of position i in lms, or -1
    lms_map = [-1] * (n + 1)
    lms = []
    for i in range(1, n):
        if not is_s[i - 1] and is_s[i]:
            lms_map[i] = len(lms)
            lms.append(i)
    m = len(lms)

    logging.debug(
        f"SA-IS level {level}: length {n}, alphabet size {alphabet_size}, "
        f"{m} LMS positions"
    )

    sum_l, sum_s = _bucket_starts(s, is_s, alphabet_size)
    sa = [-1] * n
    _induce(s, is_s, lms, sum_l, sum_s, sa)

    if m == 0:
        return sa

    sorted_lms = [v for v in sa if lms_map[v] != -1]

    # Name the LMS substrings. Equal substrings get the same name.
    names = [0] * m
    name = 0
    names[lms_map[sorted_lms[0]]] = 0
    for i in range(1, m):
        left, right = sorted_lms[i - 1], sorted_lms[i]
        end_left = lms[lms_map[left] + 1] if lms_map[left] + 1 < m else n
        end_right = lms[lms_map[right] + 1] if lms_map[right] + 1 < m else n
        same = True
        if end_left - left != end_right - right:
            same = False
        else:
            while left < end_left:
                if s[left] != s[right]:
                    break
                left += 1
                right += 1
            if left == n or right == n or s[left] != s[right]:
                same = False
        if not same:
            name += 1
        names[lms_map[sorted_lms[i]]] = name

    if name + 1 < m:
        reduced_sa = _sa_is(names, name + 1, level + 1)
        sorted_lms = [lms[i] for i in reduced_sa]

    _induce(s, is_s, sorted_lms, sum_l, sum_s, sa)
    return sa


def sais(
    array: np.ndarray, suffix_array: np.ndarray, alphabet_size: int
) -> None:
    """Fill ``suffix_array`` with the suffix array of ``array``.

    Args:
      array:
        A 1-D array of non-negative integers, each less than
        ``alphabet_size``.
      suffix_array:
        A 1-D integer array with the same length as ``array``. It is
        overwritten with a permutation of ``0 .. len(array) - 1``.
      alphabet_size:
        One past the largest symbol that may appear in ``array``.
    """
    assert array.ndim == 1, array.ndim
    n = array.shape[0]
    if len(suffix_array) != n:
        raise InvalidLengthError(
            f"Expected a suffix array buffer of length {n}, "
            f"given {len(suffix_array)}"
        )
    if n == 0:
        return

    assert array.min() >= 0, array.min()
    assert array.max() < alphabet_size, (array.max(), alphabet_size)

    suffix_array[:] = _sa_is(array.tolist(), alphabet_size)


def create_suffix_array(
    array: np.ndarray, alphabet_size: Optional[int] = None
) -> np.ndarray:
    """Create a suffix array from a 1-D input array.

    hint:
      Please refer to https://en.wikipedia.org/wiki/Suffix_array
      for what suffix array is. No sentinel is needed in the input; the
      end of the array sorts before every symbol.

    Args:
      array:
        A 1-D integer (or unsigned integer) array of shape ``(seq_len,)``.
      alphabet_size:
        One past the largest symbol. If None, the symbols are first
        renumbered to ``0 .. M - 1``, where M is the number of distinct
        symbols, which keeps the bucket arrays small.
    Returns:
      Returns a suffix array of type ``np.int64``, of shape ``(seq_len,)``.
      This will consist of some permutation of the elements
      ``0 .. seq_len - 1``.

    **Usage examples**:

        .. literalinclude:: code/suffix-array.py
    """
    array = np.asarray(array)
    assert array.ndim == 1, array.ndim

    if alphabet_size is None:
        array = _renumbering(array)
        alphabet_size = int(array.max()) + 1 if array.size else 0

    suffix_array = np.empty(array.shape[0], dtype=np.int64)
    sais(array, suffix_array, alphabet_size)
    return suffix_array
