from .config import ALPHABET_SIZE
from .config import get_params

from .enhanced import Suffix
from .enhanced import SuffixIterator
from .enhanced import get_backend
from .enhanced import suffix
from .enhanced import suffix_native
from .enhanced import text_to_symbols

from .errors import InternalError
from .errors import InvalidLengthError
from .errors import SuffixError

from .esa import PythonEsaxx
from .esa import esaxx
from .esa import suffixtree

from .native import NativeEsaxx

from .sais import create_suffix_array
from .sais import sais

from .utils import AttributeDict
from .utils import setup_logger

__version__ = "0.1.0"
