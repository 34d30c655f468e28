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

import logging
from typing import List, Tuple

import numpy as np

from .errors import InternalError, InvalidLengthError
from .sais import sais


def check_lengths(n: int, **buffers: np.ndarray) -> None:
    """Raise InvalidLengthError if any of the buffers is not of length n."""
    for name, buf in buffers.items():
        if len(buf) != n:
            raise InvalidLengthError(
                f"Expected {name} of length {n}, given {len(buf)}"
            )


def compute_height(s: List[int], sa: List[int]) -> Tuple[List[int], List[int]]:
    """Compute the longest common prefix of suffixes adjacent in ``sa``.

    It uses the permuted LCP array, see
    "Permuted Longest-Common-Prefix Array", Juha Karkkainen et al., CPM 2009.

    Args:
      s:
        The input sequence.
      sa:
        The suffix array of ``s``.
    Returns:
      Return a tuple ``(plcp, height)``. ``plcp[i]`` is the length of the
      common prefix of the suffix ``i`` and the suffix preceding it in
      ``sa``; ``height[i] = plcp[sa[i]]``. Both are 0 for ``sa[0]``, which
      has no predecessor.
    """
    n = len(s)
    # psi[sa[i]] = sa[i - 1]
    psi = [-1] * n
    for i in range(1, n):
        psi[sa[i]] = sa[i - 1]

    plcp = [0] * n
    h = 0
    for i in range(n):
        j = psi[i]
        if j < 0:
            h = 0
            continue
        while i + h < n and j + h < n and s[i + h] == s[j + h]:
            h += 1
        plcp[i] = h
        if h > 0:
            h -= 1

    height = [plcp[p] for p in sa]
    return plcp, height


def _sweep(
    sa: List[int], height: List[int]
) -> Tuple[List[int], List[int], List[int]]:
    """Find the internal nodes of the suffix tree from the height array.

    A stack of open intervals ``(start, depth)`` is kept. An interval
    closes at the first position whose height is less than its depth. Leaves
    are pushed with a depth larger than any height they take part in, so
    that they close immediately, and are not reported.

    Returns:
      Return a tuple ``(left, right, depth)`` of the nodes in the order they
      close. The root ``(0, n, 0)`` is always the last one.
    """
    n = len(sa)
    left, right, depth = [], [], []
    stack = [(0, 0)]
    for i in range(n + 1):
        if i == n:
            h = -1
        elif i == 0:
            h = 0
        else:
            h = height[i]

        start = i
        while stack and stack[-1][1] > h:
            top_start, top_depth = stack.pop()
            # Skip leaves. The root is kept even if n == 1.
            if i - top_start > 1 or top_depth == 0:
                left.append(top_start)
                right.append(i)
                depth.append(top_depth)
            start = top_start

        if i == n:
            break

        if stack[-1][1] < h:
            stack.append((start, h))
        stack.append((i, n - sa[i] + 1))

    return left, right, depth


def suffixtree(
    array: np.ndarray,
    suffix_array: np.ndarray,
    left_array: np.ndarray,
    right_array: np.ndarray,
    depth_array: np.ndarray,
) -> int:
    """Compute the nodes of the enhanced suffix array.

    The node ``i`` (``0 <= i < node_num``) is the interval
    ``[left_array[i], right_array[i])`` of ``suffix_array``, whose suffixes
    share exactly ``depth_array[i]`` leading symbols.

    Note:
      ``left_array`` and ``right_array`` are also used as scratch space:
      after the call their entries from ``node_num`` on hold the height
      array and the permuted LCP array respectively. ``depth_array`` is
      not touched from ``node_num`` on.

    Args:
      array:
        A 1-D array containing the input sequence, of length n.
      suffix_array:
        The suffix array of ``array``, of length n.
      left_array:
        Output buffer of length n.
      right_array:
        Output buffer of length n.
      depth_array:
        Output buffer of length n.
    Returns:
      Return the number of nodes.
    """
    assert array.ndim == 1, array.ndim
    n = array.shape[0]
    check_lengths(
        n,
        suffix_array=suffix_array,
        left_array=left_array,
        right_array=right_array,
        depth_array=depth_array,
    )
    if n == 0:
        return 0

    sa = [int(i) for i in suffix_array]
    plcp, height = compute_height(array.tolist(), sa)
    left, right, depth = _sweep(sa, height)

    node_num = len(left)
    if node_num > n:
        raise InternalError(f"Found {node_num} nodes in a sequence of length {n}")
    for i in range(node_num):
        if left[i] >= right[i]:
            raise InternalError(
                f"Empty interval [{left[i]}, {right[i]}) for node {i}"
            )

    left_array[:] = height
    right_array[:] = plcp
    left_array[:node_num] = left
    right_array[:node_num] = right
    depth_array[:node_num] = depth
    return node_num


def esaxx(
    array: np.ndarray,
    suffix_array: np.ndarray,
    left_array: np.ndarray,
    right_array: np.ndarray,
    depth_array: np.ndarray,
    alphabet_size: int,
) -> int:
    """Build the enhanced suffix array of ``array``.

    It sorts the suffixes with :func:`textesa.sais.sais` and then
    derives the nodes with :func:`suffixtree`.

    Args:
      array:
        A 1-D array of non-negative integers less than ``alphabet_size``.
      suffix_array:
        Output buffer of length ``len(array)`` for the suffix array.
      left_array:
        Output buffer of length ``len(array)``.
      right_array:
        Output buffer of length ``len(array)``.
      depth_array:
        Output buffer of length ``len(array)``.
      alphabet_size:
        One past the largest symbol.
    Returns:
      Return the number of nodes.
    """
    n = array.shape[0]
    check_lengths(
        n,
        suffix_array=suffix_array,
        left_array=left_array,
        right_array=right_array,
        depth_array=depth_array,
    )
    sais(array, suffix_array, alphabet_size)
    node_num = suffixtree(array, suffix_array, left_array, right_array, depth_array)
    logging.debug(f"Found {node_num} nodes in a sequence of length {n}")
    return node_num


class PythonEsaxx:
    """The self-contained backend. Indexes are stored as np.int64."""

    name = "python"
    index_dtype = np.int64

    def esaxx(
        self,
        array: np.ndarray,
        suffix_array: np.ndarray,
        left_array: np.ndarray,
        right_array: np.ndarray,
        depth_array: np.ndarray,
        alphabet_size: int,
    ) -> int:
        return esaxx(
            array,
            suffix_array,
            left_array,
            right_array,
            depth_array,
            alphabet_size,
        )
