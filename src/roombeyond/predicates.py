""" A boolean logic predicate library, and dialog choice conditions on top """

import abc
from typing import TypeVar, Generic, Optional

from roombeyond import config

T = TypeVar('T')

class Criteria(Generic[T], abc.ABC):
    @abc.abstractmethod
    def evaluate(self, universe:T) -> bool: ...

class Literal(Criteria[T]):
    def __init__(self, value:bool) -> None:
        self.value = value
    def evaluate(self, universe:T) -> bool:
        return self.value

class ConditionScope(abc.ABC):
    """ What dialog conditions get evaluated against. """

    @abc.abstractmethod
    def has_visited(self, node_id:str) -> bool: ...

    @abc.abstractmethod
    def check_flag(self, flag:str) -> bool: ...

class VisitedCriteria(Criteria[ConditionScope]):
    def __init__(self, node_id:str) -> None:
        self.node_id = node_id

    def evaluate(self, universe:ConditionScope) -> bool:
        return universe.has_visited(self.node_id)

class FlagCriteria(Criteria[ConditionScope]):
    def __init__(self, flag:str) -> None:
        self.flag = flag

    def evaluate(self, universe:ConditionScope) -> bool:
        return universe.check_flag(self.flag)

def load_condition(condition:Optional[str]) -> Criteria[ConditionScope]:
    """ parses a dialog choice condition

    no condition (None or empty) is always true, "visited:<node_id>" checks
    dialog history, anything else is a story flag name, taken as is.
    """
    if not condition:
        return Literal(True)

    prefix = config.Settings.dialog.VISITED_PREFIX
    if condition.startswith(prefix):
        return VisitedCriteria(condition[len(prefix):])

    return FlagCriteria(condition)
