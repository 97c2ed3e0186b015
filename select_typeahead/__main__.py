"""Command line entry point for trying the typeahead matcher."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from . import logging as typeahead_logging
from .config import CONFIG_FILE, load_config
from .context import SelectContext
from .key_handler import SelectKeyHandler
from .layouts import KeyboardLayout
from .options import OptionList, OptionState


def _read_labels(args, parser: argparse.ArgumentParser) -> list[str]:
    labels = list(args.options)
    if args.options_file:
        try:
            with open(args.options_file, "r", encoding="utf-8") as f:
                labels.extend(line.strip() for line in f if line.strip())
        except OSError as exc:
            parser.error(f"Could not read options file '{args.options_file}': {exc.strerror}")
    if not labels:
        parser.error("no options given")
    return labels


def _listen(ctx: SelectContext, handler: SelectKeyHandler) -> None:
    from pynput import keyboard

    def _on_press(key) -> bool | None:
        if key == keyboard.Key.esc and not ctx.open:
            return False  # stop listener
        before = ctx.focus_state.current_focus
        handler.on_key(key)
        after = ctx.focus_state.current_focus
        if after != before and after is not None:
            print(f"{ctx.typeahead_buffer!r:>12} -> {ctx.options.get(after).text_value}")
        return None

    print("Type to search, arrows to move, Enter to select, Esc twice to quit.")
    with keyboard.Listener(on_press=_on_press) as listener:
        listener.join()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="select-typeahead",
        description="Resolve typeahead input to the best matching option",
    )
    parser.add_argument("options", nargs="*", help="Option labels in list order")
    parser.add_argument("--options-file", help="File with one option label per line")
    parser.add_argument(
        "--query",
        help="Text to type; the match is printed after every keystroke",
    )
    parser.add_argument(
        "--layout",
        help="Static keyboard layout (qwerty, colemak-dh, ...) instead of adaptive matching",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help="Milliseconds of inactivity before the typeahead buffer clears",
    )
    parser.add_argument("--config", default=CONFIG_FILE, help="Path to config JSON")
    parser.add_argument(
        "--listen",
        action="store_true",
        help="Read live key presses from the keyboard",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Log file (default: ~/.select_typeahead.log)")
    args = parser.parse_args(argv)

    typeahead_logging.setup(
        logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file
    )

    cfg = load_config(args.config)
    if args.layout:
        try:
            layout = KeyboardLayout.from_name(args.layout)
        except ValueError as exc:
            parser.error(str(exc))
        cfg = replace(cfg, layout=layout.value)
    if args.timeout is not None:
        cfg = replace(cfg, typeahead_timeout_ms=args.timeout)

    labels = _read_labels(args, parser)
    options = OptionList(
        OptionState(index=i, value=label, text_value=label) for i, label in enumerate(labels)
    )
    ctx = SelectContext(
        options,
        config=cfg,
        on_select=lambda value, text: print(f"Selected: {text}"),
    )
    handler = SelectKeyHandler(ctx)
    ctx.set_open(True)

    try:
        if args.query:
            for char in args.query:
                focused = ctx.add_to_typeahead_buffer(char)
                label = options.get(focused).text_value if focused is not None else "-"
                print(f"{ctx.typeahead_buffer!r:>12} -> {label}")
        if args.listen:
            _listen(ctx, handler)
    finally:
        ctx.set_open(False)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
