__title__ = 'ecp'
__license__ = 'MIT'
__version__ = "0.1.0"

import logging

from .builder import *
from .faults import *
from .parsed import *
from .parser import *
from .shell import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
))

version_info = VersionInfo(0, 1, 0, "final", 0)

# Library logging stays silent unless the host configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the definition tree
__all__ += builder.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parse result
__all__ += parsed.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the shell shim
__all__ += shell.__all__  # type: ignore[attr-defined]
