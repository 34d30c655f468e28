import os
import sys

from .utils import AttributeDict

# All of the UCS4 range
ALPHABET_SIZE = 0x110000

BACKENDS = ("python", "native")


def default_native_lib() -> str:
    """Return the default path of the esaxx shared library.

    It is looked up next to this file.
    """
    lib_filename = "libesaxx.so"
    if os.name == "nt":
        lib_filename = "esaxx.dll"
    elif sys.platform == "darwin":
        lib_filename = "libesaxx.dylib"
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), lib_filename)


def get_native_lib() -> str:
    """Return the esaxx shared library path, TEXTESA_NATIVE_LIB if set."""
    return os.environ.get("TEXTESA_NATIVE_LIB", default_native_lib())


def get_params() -> AttributeDict:
    """Return the configuration read from the environment.

    - TEXTESA_BACKEND: "python" (default) or "native".
    - TEXTESA_NATIVE_LIB: path to the esaxx shared library used by the
      native backend.
    """
    params = AttributeDict(
        {
            "backend": os.environ.get("TEXTESA_BACKEND", "python"),
            "native_lib": get_native_lib(),
            "alphabet_size": ALPHABET_SIZE,
        }
    )
    if params.backend not in BACKENDS:
        raise ValueError(
            f"Unsupported backend {params.backend!r}. "
            f"Valid values are: {', '.join(BACKENDS)}"
        )
    return params
