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


class SuffixError(Exception):
    """Base class of errors raised while building an enhanced suffix array."""


class InvalidLengthError(SuffixError, ValueError):
    """An output buffer does not have the same length as the input sequence.

    It is raised before any work is done, so the caller can retry with
    correctly sized buffers.
    """


class InternalError(SuffixError, RuntimeError):
    """The construction failed after it started.

    The content of the output buffers is undefined when this is raised.
    """
