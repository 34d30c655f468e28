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
Bridge to the esaxx C++ library, which exports

    int esaxx_int32(const uint32_t *T, int32_t *SA, int32_t *L, int32_t *R,
                    int32_t *D, uint32_t n, uint32_t k, uint32_t *nodeNum);

The library is not part of this package. Only the buffer contract is
checked here; the algorithm is the library's own.
"""

import ctypes
import logging
from typing import Optional

import numpy as np

from .config import get_native_lib
from .errors import InternalError, InvalidLengthError
from .esa import check_lengths

_INT32_MAX = np.iinfo(np.int32).max


class NativeEsaxx:
    """The native backend. Indexes are stored as np.int32."""

    name = "native"
    index_dtype = np.int32

    def __init__(self, lib):
        """
        Args:
          lib:
            A loaded library exposing ``esaxx_int32``, e.g. the return value
            of ``ctypes.CDLL``.
        """
        self.lib = lib

        index_pointer = np.ctypeslib.ndpointer(
            dtype=np.int32, ndim=1, flags="C_CONTIGUOUS, WRITEABLE"
        )
        self._esaxx = lib.esaxx_int32
        self._esaxx.restype = ctypes.c_int32
        self._esaxx.argtypes = [
            np.ctypeslib.ndpointer(dtype=np.uint32, ndim=1, flags="C_CONTIGUOUS"),
            index_pointer,
            index_pointer,
            index_pointer,
            index_pointer,
            ctypes.c_uint32,
            ctypes.c_uint32,
            ctypes.POINTER(ctypes.c_uint32),
        ]

    @classmethod
    def load(cls, lib_path: Optional[str] = None) -> "NativeEsaxx":
        """Load the esaxx shared library.

        Args:
          lib_path:
            Path to the library. If None, TEXTESA_NATIVE_LIB or the default
            location next to the package is used.
        """
        if lib_path is None:
            lib_path = get_native_lib()

        try:
            lib = ctypes.CDLL(lib_path)
        except OSError as e:
            raise OSError(
                f"Failed to load the esaxx library at {lib_path}. "
                "Please build it from sentencepiece's esaxx sources, exporting "
                "esaxx_int32, and point TEXTESA_NATIVE_LIB to it. "
                f"Original error: {e}"
            ) from e

        logging.debug(f"Loaded esaxx library from {lib_path}")
        return cls(lib)

    def esaxx(
        self,
        array: np.ndarray,
        suffix_array: np.ndarray,
        left_array: np.ndarray,
        right_array: np.ndarray,
        depth_array: np.ndarray,
        alphabet_size: int,
    ) -> int:
        """Build the enhanced suffix array of ``array`` with the library.

        The arguments and the return value are the same as
        :func:`textesa.esa.esaxx`. The output buffers must be contiguous
        np.int32 arrays.
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
        if n > _INT32_MAX:
            raise InvalidLengthError(
                f"Length {n} does not fit the int32 indexes of esaxx_int32"
            )
        for buf in (suffix_array, left_array, right_array, depth_array):
            assert buf.dtype == np.int32, buf.dtype
            assert buf.flags.c_contiguous

        # The C++ code requires the input array to be contiguous.
        array_uint32 = np.ascontiguousarray(array, dtype=np.uint32)
        node_num = ctypes.c_uint32(0)
        ret = self._esaxx(
            array_uint32,
            suffix_array,
            left_array,
            right_array,
            depth_array,
            n,
            alphabet_size,
            ctypes.pointer(node_num),
        )
        if ret != 0:
            raise InternalError(f"esaxx_int32 failed with status {ret}")
        return node_num.value
