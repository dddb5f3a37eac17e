""" Registry of the interactable objects in the room. """

import logging
from collections.abc import Iterator, Iterable, Mapping
from typing import Any, Optional

from roombeyond import util
from .base import InteractableObject

class ObjectRegistry:
    """ Flat, ordered collection of interactable objects.

    Registration order is significant: it breaks ties when picking a focus
    target. Objects are never removed during a session.
    """

    def __init__(self, objects:Optional[Iterable[InteractableObject]]=None) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self._objects:dict[str, InteractableObject] = {}
        if objects is not None:
            for obj in objects:
                self.register(obj)

    def register(self, obj:InteractableObject) -> None:
        if not obj.object_id:
            raise ValueError("interactable objects must have a non-empty id")
        if obj.object_id in self._objects:
            raise ValueError(f'object {obj.object_id} already registered')
        if util.either_nan_or_inf(obj.position):
            raise ValueError(f'object {obj.object_id} has a bad position {obj.position}')
        self._objects[obj.object_id] = obj
        self.logger.debug(f'registered {obj}')

    def get(self, object_id:str) -> Optional[InteractableObject]:
        return self._objects.get(object_id)

    def __getitem__(self, object_id:str) -> InteractableObject:
        return self._objects[object_id]

    def __contains__(self, object_id:object) -> bool:
        return object_id in self._objects

    def __iter__(self) -> Iterator[InteractableObject]:
        return iter(self._objects.values())

    def __len__(self) -> int:
        return len(self._objects)

    def ids(self) -> list[str]:
        return list(self._objects.keys())

def load_objects(object_data:Iterable[Mapping[str, Any]]) -> list[InteractableObject]:
    """ builds objects from room layout data (see config room.objects) """
    return [
        InteractableObject(
            x["id"],
            x["position"],
            name=x.get("name"),
            description=x.get("description"),
            focusable=x.get("focusable", True),
        )
        for x in object_data
    ]
