""" Focus and proximity: what the player is paying attention to.

Each frame the host reports where the player is and where the camera points.
We keep track of which objects are nearby (the proximity set) and pick at most
one of those as the focus, the thing an "interact" press will act on.

Picking the focus trades off distance against how centered the object is in
view:

    score = DISTANCE_WEIGHT * distance + CENTER_WEIGHT * (|screen_x| + |screen_y|)

lowest score wins, ties go to whichever object was registered first. The
weights are a feel thing, see config focus section.
"""

import math
import logging
from typing import Any, NamedTuple, Optional

import numpy as np

from roombeyond import core, util, config

class CameraPose:
    def __init__(self, position:util.Vec3Like, forward:util.Vec3Like) -> None:
        self.position = util.vec3(position)
        self.forward = util.vec3(forward)
        if util.either_nan_or_inf(self.position) or util.either_nan_or_inf(self.forward):
            raise ValueError(f'camera pose needs finite vectors, got {self.position} {self.forward}')

    def __repr__(self) -> str:
        return f'CameraPose({self.position.tolist()!r}, {self.forward.tolist()!r})'

class ProximityUpdate(NamedTuple):
    entered: list[str]
    exited: list[str]

class FocusObserver(core.Observer):
    def proximity_entered(self, obj:core.InteractableObject) -> None:
        pass

    def proximity_exited(self, obj:core.InteractableObject) -> None:
        pass

    def focus_changed(self, previous:Optional[core.InteractableObject], current:Optional[core.InteractableObject]) -> None:
        pass

class FocusSelector(core.Observable[FocusObserver]):
    """ Tracks the proximity set and the focused object.

    Call update_proximity and then update_focus once per frame, in that order.
    Neither can fail, having nothing in focus is a perfectly good state.
    update_proximity drops the focus as soon as it stops being nearby.
    """

    def __init__(
            self,
            registry:core.ObjectRegistry,
            *args:Any,
            proximity_radius:Optional[float]=None,
            focus_radius:Optional[float]=None,
            distance_weight:Optional[float]=None,
            center_weight:Optional[float]=None,
            fov_degrees:Optional[float]=None,
            aspect_ratio:Optional[float]=None,
            world_up:Optional[util.Vec3Like]=None,
            **kwargs:Any) -> None:
        super().__init__(*args, **kwargs)
        self.logger = logging.getLogger(util.fullname(self))
        self.registry = registry

        settings = config.Settings
        self.proximity_radius = proximity_radius if proximity_radius is not None else settings.focus.PROXIMITY_RADIUS
        self.focus_radius = focus_radius if focus_radius is not None else settings.focus.FOCUS_RADIUS
        self.distance_weight = distance_weight if distance_weight is not None else settings.focus.DISTANCE_WEIGHT
        self.center_weight = center_weight if center_weight is not None else settings.focus.CENTER_WEIGHT
        self.fov_radians = math.radians(fov_degrees if fov_degrees is not None else settings.camera.FOV_DEGREES)
        self.aspect_ratio = aspect_ratio if aspect_ratio is not None else settings.camera.ASPECT_RATIO
        self.world_up = util.vec3(world_up if world_up is not None else settings.camera.WORLD_UP)

        self._proximity:set[str] = set()
        self._focused:Optional[str] = None

    @property
    def proximity(self) -> list[str]:
        """ ids currently nearby, in registration order """
        return [x.object_id for x in self.registry if x.object_id in self._proximity]

    def in_proximity(self, object_id:str) -> bool:
        return object_id in self._proximity

    def get_focused(self) -> Optional[str]:
        return self._focused

    @property
    def focused_object(self) -> Optional[core.InteractableObject]:
        if self._focused is None:
            return None
        return self.registry.get(self._focused)

    def can_interact(self) -> bool:
        return self._focused is not None

    def update_proximity(self, player_position:util.Vec3Like) -> ProximityUpdate:
        player_loc = util.vec3(player_position)

        entered:list[core.InteractableObject] = []
        exited:list[core.InteractableObject] = []
        current:set[str] = set()
        for obj in self.registry:
            # closed interval, an object exactly at the radius is nearby
            if util.distance(obj.position, player_loc) <= self.proximity_radius:
                current.add(obj.object_id)
                if obj.object_id not in self._proximity:
                    entered.append(obj)
            elif obj.object_id in self._proximity:
                exited.append(obj)

        self._proximity = current

        for obj in exited:
            self.logger.debug(f'{obj.object_id} left proximity')
            for observer in self._notify():
                observer.proximity_exited(obj)
        for obj in entered:
            self.logger.debug(f'{obj.object_id} entered proximity')
            for observer in self._notify():
                observer.proximity_entered(obj)

        # focus is always something nearby
        if self._focused is not None and self._focused not in current:
            previous = self.focused_object
            self._focused = None
            self.logger.debug(f'focus changed {previous} -> None')
            for observer in self._notify():
                observer.focus_changed(previous, None)

        return ProximityUpdate([x.object_id for x in entered], [x.object_id for x in exited])

    def score(self, obj:core.InteractableObject, camera_pose:CameraPose, player_position:util.Vec3Like) -> Optional[float]:
        """ focus score for obj, lower is better, None if it can't be focused

        This doesn't look at the proximity set, only at obj itself. """

        if not obj.focusable:
            return None

        player_loc = util.vec3(player_position)
        dist = util.distance(obj.position, player_loc)
        if dist > self.focus_radius:
            return None

        basis = util.camera_basis(camera_pose.forward, self.world_up)
        if basis is None:
            return None

        screen = util.project_to_screen(obj.position, camera_pose.position, basis, self.fov_radians, self.aspect_ratio)
        if screen is None:
            # behind the camera, never focus on that
            return None

        screen_x, screen_y = screen
        return self.distance_weight * dist + self.center_weight * (abs(screen_x) + abs(screen_y))

    def update_focus(self, camera_pose:CameraPose, player_position:util.Vec3Like) -> bool:
        """ recomputes focus among nearby objects, returns True iff it changed """

        best_id:Optional[str] = None
        best_score = np.inf
        for obj in self.registry:
            if obj.object_id not in self._proximity:
                continue
            s = self.score(obj, camera_pose, player_position)
            # strict comparison so the first registered object wins ties
            if s is not None and s < best_score:
                best_score = s
                best_id = obj.object_id

        if best_id == self._focused:
            return False

        previous = self.focused_object
        self._focused = best_id
        current = self.focused_object
        self.logger.debug(f'focus changed {previous} -> {current}')
        for observer in self._notify():
            observer.focus_changed(previous, current)
        return True

