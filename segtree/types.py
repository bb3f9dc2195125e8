from typing import Callable, TypeVar

#: Element / aggregate domain of a tree.
T = TypeVar("T")
#: Domain of deferred range effects.
E = TypeVar("E")

Combine = Callable[[T, T], T]
Apply = Callable[[T, E], T]
Compose = Callable[[E, E], E]
