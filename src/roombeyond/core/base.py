""" Room Beyond core data model basic objects

No dependencies on other parts of the datamodel
"""

import abc
import logging
from collections.abc import Iterable
from typing import Optional, Any, Collection, Generic, TypeVar

import numpy as np
import numpy.typing as npt

from roombeyond import util, _version

logger = logging.getLogger(__name__)

def roombeyond_version() -> str:
    return _version.version

class Observer(abc.ABC):
    def __init__(self, *args:Any, **kwargs:Any) -> None:
        super().__init__(*args, **kwargs)
        self._observings:list[Observable] = []

    @property
    def observings(self) -> Iterable["Observable"]:
        return self._observings

    def mark_observing(self, observed:"Observable") -> None:
        if observed not in self._observings:
            self._observings.append(observed)

    def unmark_observing(self, observed:"Observable") -> None:
        self._observings.remove(observed)

T = TypeVar("T", bound=Observer)

class Observable(Generic[T], abc.ABC):
    """ Something observers can subscribe to.

    Observers are held strongly and notified synchronously in the order they
    were registered. Observers must not call back into the observable that is
    notifying them while it is notifying them, that isn't checked.
    """

    def __init__(self, *args:Any, **kwargs:Any) -> None:
        super().__init__(*args, **kwargs)
        self._observers:list[T] = []

    @property
    def observers(self) -> Collection[T]:
        return self._observers

    def observe(self, observer:T) -> None:
        # double observe is a no-op, an observer hears each event once
        if observer in self._observers:
            return
        self._observers.append(observer)
        observer.mark_observing(self)

    def unobserve(self, observer:T) -> None:
        # allow double unobserve calls
        if observer in self._observers:
            self._observers.remove(observer)
            observer.unmark_observing(self)

    def clear_observers(self) -> None:
        for observer in self._observers.copy():
            self.unobserve(observer)

    def _notify(self) -> list[T]:
        """ snapshot of observers to notify

        observers can unobserve themselves while being notified without
        disturbing delivery to the rest. """
        return self._observers.copy()

class InteractableObject:
    """ Something in the room the player can look at and examine.

    Created by whatever builds the scene and read by the core, except for
    examined, which the core sets the first time the player interacts with it.
    """

    def __init__(self, object_id:str, position:util.Vec3Like, name:Optional[str]=None, description:Optional[str]=None, focusable:bool=True) -> None:
        self.object_id = object_id
        self.position:npt.NDArray[np.float64] = util.vec3(position)

        if name is None:
            name = object_id.replace("_", " ").title()
        self.name = name

        self.description = description or name
        self.focusable = focusable
        self.examined = False

    def __str__(self) -> str:
        return f'{self.object_id} ({self.name})'

    def __repr__(self) -> str:
        return f'InteractableObject({self.object_id!r}, {self.position.tolist()!r}, focusable={self.focusable})'
