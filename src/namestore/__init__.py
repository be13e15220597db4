"""
Namestore - ordered, name-indexed collections with duplicate keys.

- namestore.core: NameValueStore, KeyView, KeyEnumerator, PropertyBag
"""

__version__ = "0.1.0"

from namestore.core import *  # noqa
from namestore.core import __all__ as _core_all

__all__ = ["__version__", *_core_all]
