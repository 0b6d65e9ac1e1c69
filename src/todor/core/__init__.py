"""
Core module.

Example
-------
>>> from todor import TodoR
>>>
>>> todor = TodoR()
>>> batch = todor.open_many(["src/main.rs", "setup.py"])
>>> for path, todo in todor.iter_todos():
...     print(path, todo)
"""
from __future__ import annotations

from .results import BatchResult, ErrorResult, Result
from .todor import TodoR, file_extension

__all__ = [
    "TodoR",
    "Result",
    "ErrorResult",
    "BatchResult",
    "file_extension",
]
