""" Offline check of dialog content against the room layout.

Prints one line per issue and exits non-zero if any of them are errors.
"""

import sys
import logging
import argparse
import contextlib

from roombeyond import config, dialog


def validate_all() -> list[dialog.DialogIssue]:
    object_ids = [x["id"] for x in config.Settings.room.objects]
    issues:list[dialog.DialogIssue] = []
    for graph in dialog.load_dialogs().values():
        issues.extend(dialog.validate_dialog(graph, object_ids))
    return issues


def main() -> None:
    logging.basicConfig(stream=sys.stderr, level=logging.INFO)
    logger = logging.getLogger(__name__)

    with contextlib.ExitStack() as context_stack:
        parser = argparse.ArgumentParser(description="check dialog content")
        parser.add_argument("-c", "--config", type=str, default=None,
                help="toml file overriding the built-in config")
        parser.add_argument("-d", "--dialogs", type=str, default=None,
                help="toml file replacing the built-in dialogs")
        parser.add_argument("-w", "--strict", action="store_true",
                help="treat warnings as errors")
        args = parser.parse_args()

        if args.config:
            config.load_config(context_stack.enter_context(open(args.config, "rt")))
        if args.dialogs:
            config.load_dialogs(context_stack.enter_context(open(args.dialogs, "rt")))

        issues = validate_all()
        for issue in issues:
            print(str(issue))

        errors = sum(1 for x in issues if x.error or args.strict)
        logger.info(f'{len(config.Dialogs)} dialogs, {len(issues)} issues, {errors} errors')
        if errors > 0:
            sys.exit(1)

if __name__ == "__main__":
    main()
