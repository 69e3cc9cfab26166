"""
Interactive compile, evaluate and print loop

Drives a compiler session and an evaluation host through one cycle per
submitted line, printing results (cyclic and tagged values included) as
stable text. Ships a reference compiler for a small ML-style language.
"""

__version__ = "0.1.0"


from ._error import *
from ._value import *
from ._printer import *
from ._history import *
from ._output import *
from ._session import *
from ._driver import *
from ._parse import *
from ._compile import *
from . import _ast as ast
