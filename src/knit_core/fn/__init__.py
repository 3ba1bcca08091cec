"""Currying and partial application.

Example:
    ```python
    from knit_core.fn import curry, partial

    def add3(a, b, c):
        return a + b + c

    curry(add3)(1)(2)(3)  # 6
    partial(add3, 1, 2)(3)  # 6
    ```
"""

from knit_core.fn.curry import Curried, curry
from knit_core.fn.partial import Partial, partial

__all__ = [
    'Curried',
    'Partial',
    'curry',
    'partial',
]
