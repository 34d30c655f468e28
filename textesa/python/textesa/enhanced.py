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
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .config import ALPHABET_SIZE, get_params
from .esa import PythonEsaxx
from .native import NativeEsaxx


@dataclass(frozen=True, eq=False)
class Suffix:
    """
    The enhanced suffix array of a text.

    The node ``i`` (``0 <= i < node_num``) is the interval
    ``[left_array[i], right_array[i])`` of ``suffix_array``. It stands for
    the substring of length ``depth_array[i]`` shared by the suffixes in the
    interval, which occurs ``right_array[i] - left_array[i]`` times in the
    text. Entries of the three node arrays from ``node_num`` on are scratch
    values and carry no meaning.

    All arrays are read-only.
    """

    # The input text
    text: str

    # Unicode codepoint of each character of the text, np.uint32
    chars: np.ndarray

    suffix_array: np.ndarray
    left_array: np.ndarray
    right_array: np.ndarray
    depth_array: np.ndarray

    node_num: int

    def __post_init__(self):
        n = len(self.text)
        for array in (
            self.chars,
            self.suffix_array,
            self.left_array,
            self.right_array,
            self.depth_array,
        ):
            assert array.shape == (n,), (array.shape, n)
            array.flags.writeable = False
        assert 0 <= self.node_num <= n, (self.node_num, n)

    def __len__(self) -> int:
        return len(self.text)

    def iter(self) -> "SuffixIterator":
        """Return an iterator over ``(substring, frequency)`` of every node."""
        return SuffixIterator(self)

    def __iter__(self) -> "SuffixIterator":
        return self.iter()


class SuffixIterator:
    """Iterate over the nodes of a :class:`Suffix` in the order they were
    found, yielding ``(substring, frequency)``.
    """

    def __init__(self, suffix: Suffix):
        self.suffix = suffix
        self.i = 0

    def __iter__(self) -> "SuffixIterator":
        return self

    def __next__(self) -> Tuple[str, int]:
        suffix = self.suffix
        if self.i >= suffix.node_num:
            raise StopIteration

        left = int(suffix.left_array[self.i])
        right = int(suffix.right_array[self.i])
        offset = int(suffix.suffix_array[left])
        length = int(suffix.depth_array[self.i])
        self.i += 1
        return suffix.text[offset : offset + length], right - left


Backend = Union[PythonEsaxx, NativeEsaxx]


def get_backend(name: Optional[str] = None) -> Backend:
    """Return the backend with the given name.

    Args:
      name:
        Either "python" or "native". If None, the backend configured with
        TEXTESA_BACKEND is used.
    """
    if name is None:
        name = get_params().backend

    if name == "python":
        return PythonEsaxx()
    elif name == "native":
        return NativeEsaxx.load()
    raise ValueError(f"Unknown backend {name!r}")


def text_to_symbols(text: str) -> np.ndarray:
    """Return the Unicode codepoint of each character as a np.uint32 array."""
    return np.fromiter((ord(c) for c in text), dtype=np.uint32, count=len(text))


def suffix(text: str, backend: Union[str, Backend, None] = None) -> Suffix:
    """Create the enhanced suffix array of a text.

    **Usage examples**:

        .. literalinclude:: code/suffix.py

    Args:
      text:
        The input text.
      backend:
        A backend name ("python" or "native"), a backend object, or None to
        use the configured one.
    Returns:
      Return the enhanced suffix array. Iterate over it to get every
      substring that labels a node together with its number of occurrences.
    """
    if backend is None or isinstance(backend, str):
        backend = get_backend(backend)

    chars = text_to_symbols(text)
    n = chars.shape[0]
    suffix_array = np.zeros(n, dtype=backend.index_dtype)
    left_array = np.zeros(n, dtype=backend.index_dtype)
    right_array = np.zeros(n, dtype=backend.index_dtype)
    depth_array = np.zeros(n, dtype=backend.index_dtype)

    logging.debug(f"Building the suffix array of {n} symbols with {backend.name}")
    node_num = backend.esaxx(
        chars,
        suffix_array,
        left_array,
        right_array,
        depth_array,
        ALPHABET_SIZE,
    )
    return Suffix(
        text=text,
        chars=chars,
        suffix_array=suffix_array,
        left_array=left_array,
        right_array=right_array,
        depth_array=depth_array,
        node_num=node_num,
    )


def suffix_native(text: str, lib_path: Optional[str] = None) -> Suffix:
    """Create the enhanced suffix array of a text with the esaxx library.

    See :func:`suffix`. The arrays are of type np.int32.

    Args:
      text:
        The input text.
      lib_path:
        Path to the esaxx shared library. If None, the configured one is
        used.
    """
    return suffix(text, backend=NativeEsaxx.load(lib_path))
