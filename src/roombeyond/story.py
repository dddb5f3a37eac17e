""" Story progression: flags, discovered objects and acts.

Acts only ever move forward one at a time and only when asked to. What we do
on our own is derive completion flags: act1_complete once enough objects have
been discovered in act 1, act2_complete once the critical flags are all set in
act 2. Whoever drives the game decides when to actually advance.
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional, TypedDict, Union

from roombeyond import core, util, config

FlagValue = Union[bool, int, float, str]


class InvalidTransition(Exception):
    """ Tried to move to an act that isn't the next one. """

    def __init__(self, current_act:int, target_act:int) -> None:
        super().__init__(f'cannot go from act {current_act} to act {target_act}')
        self.current_act = current_act
        self.target_act = target_act


class StoryObserver(core.Observer):
    def flag_changed(self, story:"Story", name:str, value:FlagValue) -> None:
        pass

    def object_discovered(self, story:"Story", object_id:str, total:int) -> None:
        pass

    def act_changed(self, story:"Story", previous:int, current:int) -> None:
        pass


class StoryState(TypedDict):
    flags: dict[str, FlagValue]
    discoveredObjects: list[str]
    currentAct: int


def completion_flag(act:int) -> str:
    return f'act{act}_complete'


class Story(core.Observable[StoryObserver]):
    def __init__(
            self,
            *args:Any,
            act1_discoveries:Optional[int]=None,
            act2_critical_flags:Optional[Iterable[str]]=None,
            **kwargs:Any) -> None:
        super().__init__(*args, **kwargs)
        self.logger = logging.getLogger(util.fullname(self))

        settings = config.Settings.story
        self.act1_discoveries = act1_discoveries if act1_discoveries is not None else settings.ACT1_DISCOVERIES
        self.act2_critical_flags = list(act2_critical_flags if act2_critical_flags is not None else settings.ACT2_CRITICAL_FLAGS)

        self._flags:dict[str, FlagValue] = {}
        # dict as an ordered set, discovery order is kept for saves
        self._discovered:dict[str, None] = {}
        self._act:int = settings.FIRST_ACT

    # queries

    @property
    def current_act(self) -> int:
        return self._act

    @property
    def flags(self) -> dict[str, FlagValue]:
        return dict(self._flags)

    def get_flag(self, name:str, default:Optional[FlagValue]=None) -> Optional[FlagValue]:
        return self._flags.get(name, default)

    def check_flag(self, name:str) -> bool:
        """ truthiness of a flag, unset flags are false

        this is what dialog conditions use """
        return bool(self._flags.get(name, False))

    def is_discovered(self, object_id:str) -> bool:
        return object_id in self._discovered

    @property
    def discovered_count(self) -> int:
        return len(self._discovered)

    @property
    def discovered_objects(self) -> list[str]:
        return list(self._discovered)

    # mutations

    def set_flag(self, name:str, value:FlagValue) -> None:
        self._flags[name] = value
        self.logger.debug(f'flag {name} = {value!r}')
        for observer in self._notify():
            observer.flag_changed(self, name, value)
        self.check_act_progression()

    def discover_object(self, object_id:str) -> bool:
        """ records a discovery, returns True iff it's new """
        if object_id in self._discovered:
            return False
        self._discovered[object_id] = None
        total = len(self._discovered)
        self.logger.info(f'discovered {object_id} ({total} total)')
        for observer in self._notify():
            observer.object_discovered(self, object_id, total)
        self.check_act_progression()
        return True

    def check_act_progression(self) -> None:
        """ sets the current act's completion flag if it's been earned

        never changes the act. does nothing if the flag is already truthy. """

        if self._act == 1:
            flag = completion_flag(1)
            if not self._flags.get(flag) and len(self._discovered) >= self.act1_discoveries:
                self.set_flag(flag, True)
        elif self._act == 2:
            flag = completion_flag(2)
            if not self._flags.get(flag) and all(self._flags.get(x) is True for x in self.act2_critical_flags):
                self.set_flag(flag, True)

    def can_progress_to_next_act(self) -> bool:
        return self._flags.get(completion_flag(self._act)) is True

    def transition_to_act(self, act:int) -> None:
        if act != self._act + 1:
            raise InvalidTransition(self._act, act)

        previous = self._act
        self._act = act
        self.logger.info(f'act {previous} -> act {act}')
        for observer in self._notify():
            observer.act_changed(self, previous, act)
        # completion of the new act might already be earned
        self.check_act_progression()

    # save/restore

    def export_state(self) -> StoryState:
        return {
            "flags": dict(self._flags),
            "discoveredObjects": list(self._discovered),
            "currentAct": self._act,
        }

    def import_state(self, state:StoryState) -> None:
        """ restores exactly what export_state gave, no notifications """
        self._flags = dict(state["flags"])
        self._discovered = dict.fromkeys(state["discoveredObjects"])
        self._act = int(state["currentAct"])
