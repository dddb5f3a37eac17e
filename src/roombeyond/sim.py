""" Headless driver for The Room Beyond.

Reads one command per line and prints what a player would see:

    pos X Y Z         move the player (the camera sits at the player)
    look X Y Z        point the camera along a direction
    look YAW PITCH    same, from angles in degrees
    tick              recompute proximity and focus
    interact          act on whatever is in focus
    choose N          take dialog choice N
    end               close the dialog
    act               advance to the next act, if it's complete
    status            print where things stand
    save / load       snapshot the game in memory / go back to it
    quit

pos and look tick on their own.
"""

import sys
import math
import logging
import argparse
import contextlib
import json
from typing import Optional, TextIO

import numpy as np

from roombeyond import core, util, config, focus, gamestate, presenter, story


class Driver:
    def __init__(self, gs:gamestate.Gamestate, out:TextIO) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.gamestate = gs
        self.out = out
        self.player_position = util.vec3(config.Settings.room.PLAYER_START)
        self.camera_forward = util.vec3(config.Settings.room.CAMERA_FORWARD)
        self.snapshot:Optional[gamestate.GameState] = None

    def _write(self, line:str) -> None:
        self.out.write(line + "\n")

    def tick(self) -> None:
        self.gamestate.tick(focus.CameraPose(self.player_position, self.camera_forward), self.player_position)

    def move(self, position:util.Vec3Like, forward:util.Vec3Like) -> None:
        # CameraPose rejects non-finite vectors before we keep them
        pose = focus.CameraPose(position, forward)
        self.player_position = pose.position
        self.camera_forward = pose.forward
        self.tick()

    def status(self) -> None:
        gs = self.gamestate
        self._write(f'roombeyond {core.roombeyond_version()}')
        self._write(f'position {self.player_position.tolist()} looking {np.round(self.camera_forward, 3).tolist()}')
        self._write(f'nearby: {", ".join(gs.focus.proximity) or "nothing"}')
        self._write(f'focus: {gs.focus.get_focused()}')
        self._write(f'act {gs.story.current_act}, discovered {gs.story.discovered_count}: {", ".join(gs.story.discovered_objects)}')
        self._write(f'flags: {json.dumps(gs.story.flags, sort_keys=True)}')
        if gs.dialogs.is_active():
            self._write(f'in dialog {gs.dialogs.current_object_id} at {gs.dialogs.session.current_node_id}')

    def execute(self, line:str) -> bool:
        """ runs one command, returns False when it's time to stop """

        parts = line.split()
        if not parts or parts[0].startswith("#"):
            return True
        command, args = parts[0].lower(), parts[1:]

        try:
            if command == "quit":
                return False
            elif command == "pos":
                self.move([float(x) for x in args], self.camera_forward)
            elif command == "look":
                if len(args) == 2:
                    yaw, pitch = (math.radians(float(x)) for x in args)
                    self.move(self.player_position, util.direction_from_angles(yaw, pitch))
                else:
                    self.move(self.player_position, [float(x) for x in args])
            elif command == "tick":
                self.tick()
            elif command == "interact":
                if not self.gamestate.interact():
                    self._write("nothing happens")
            elif command == "choose":
                if len(args) != 1 or not self.gamestate.select_choice(int(args[0])):
                    self._write("you can't say that")
            elif command == "end":
                self.gamestate.end_dialog()
            elif command == "act":
                if not self.gamestate.advance_act():
                    self._write("not yet")
            elif command == "status":
                self.status()
            elif command == "save":
                self.snapshot = self.gamestate.export_state()
                self._write("saved")
            elif command == "load":
                if self.snapshot is None:
                    self._write("nothing saved")
                else:
                    self.gamestate.import_state(self.snapshot)
                    self.tick()
                    self._write("loaded")
            else:
                self._write(f'unknown command {command}')
        except ValueError as e:
            # bad numbers from the command line, not a game problem
            self.logger.debug(f'bad command {line!r}: {e}')
            self._write(f'bad arguments for {command}')
        except story.InvalidTransition as e:
            self.logger.error(f'{e}')
            self._write(str(e))

        return True

    def run(self, fin:TextIO, prompt:bool=False) -> None:
        self.tick()
        while True:
            if prompt:
                self.out.write("> ")
                self.out.flush()
            line = fin.readline()
            if not line:
                break
            if not self.execute(line):
                break


def main() -> None:
    with contextlib.ExitStack() as context_stack:
        parser = argparse.ArgumentParser(description="The Room Beyond, headless")
        parser.add_argument("-i", "--input", nargs="?", type=str, default="-",
                help="file of commands, \"-\" for stdin. default \"-\"")
        parser.add_argument("-c", "--config", type=str, default=None,
                help="toml file overriding the built-in config")
        parser.add_argument("-d", "--dialogs", type=str, default=None,
                help="toml file replacing the built-in dialogs")
        parser.add_argument("-l", "--log", type=str, default="/tmp/roombeyond.log",
                help="where to write the log. default /tmp/roombeyond.log")
        parser.add_argument("-v", "--verbose", action="store_true",
                help="also show proximity and flag changes")
        parser.add_argument("--pdb", action="store_true")
        parser.add_argument("--version", action="version", version=core.roombeyond_version())
        args = parser.parse_args()

        logging.basicConfig(
                format="%(asctime)s %(name)-12s %(levelname)-8s %(message)s",
                filename=args.log,
                level=logging.DEBUG if args.verbose else logging.INFO,
        )
        logging.getLogger("numpy").level = logging.WARN

        if args.pdb:
            context_stack.enter_context(util.PDBManager())

        if args.config:
            config.load_config(context_stack.enter_context(open(args.config, "rt")))
        if args.dialogs:
            config.load_dialogs(context_stack.enter_context(open(args.dialogs, "rt")))

        gs = gamestate.Gamestate.from_config()
        text_presenter = presenter.TextPresenter(sys.stdout, verbose=args.verbose)
        text_presenter.attach(gs)

        if args.input == "-":
            fin = sys.stdin
        else:
            fin = context_stack.enter_context(open(args.input, "rt"))

        driver = Driver(gs, sys.stdout)
        driver.run(fin, prompt=args.input == "-" and sys.stdin.isatty())

if __name__ == "__main__":
    main()
