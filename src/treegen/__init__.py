try:
    from ._version import version as __version__  # populated by setuptools-scm
except ModuleNotFoundError:
    __version__ = "0.0.0"

from .config import GenerationConfig, OutputFormat, build_config
from .errors import InvalidConfiguration, TreegenError, UnsupportedFormat
from .generator import GenerationResult, generate, generate_text

__all__ = [
    "__version__",
    "GenerationConfig",
    "GenerationResult",
    "InvalidConfiguration",
    "OutputFormat",
    "TreegenError",
    "UnsupportedFormat",
    "build_config",
    "generate",
    "generate_text",
]
