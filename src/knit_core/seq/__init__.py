"""Collection combinators over ordered sequences.

`map`, `filter` and `reduce` deliberately share the builtin names; import the
module (`from knit_core import seq`) or use the flat aliases `map_seq`,
`filter_seq` and `reduce_seq` to avoid shadowing the builtins.
"""

from knit_core.async_.itertools import map_async
from knit_core.seq.combinators import Seq, filter, map, reduce  # noqa: A004

__all__ = [
    'Seq',
    'filter',
    'map',
    'map_async',
    'reduce',
]
