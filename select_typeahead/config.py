from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import json
import logging
import os

log = logging.getLogger(__name__)


@dataclass
class TypeaheadConfig:
    typeahead_timeout_ms: int = 1000  # idle time before the buffer clears
    layout: str = "adaptive"          # "adaptive" or a static layout name
    correction_decay: float = 0.9
    correction_floor: float = 0.1
    physical_weight: float = 0.3      # dampening for learned key proximity
    roving_loop: bool = True          # arrow keys wrap around the list


CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".select_typeahead")
CONFIG_FILE = os.path.join(CONFIG_DIR, "typeahead.json")


def load_config(path: str = CONFIG_FILE) -> "TypeaheadConfig":
    """Return saved typeahead settings or defaults if unavailable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        log.debug("Using default typeahead config (%s)", exc)
        return TypeaheadConfig()
    if not isinstance(data, dict):
        log.warning("Ignoring malformed config in %s", path)
        return TypeaheadConfig()
    known = {f.name for f in fields(TypeaheadConfig)}
    return TypeaheadConfig(**{k: v for k, v in data.items() if k in known})


def save_config(config: "TypeaheadConfig", path: str = CONFIG_FILE) -> None:
    """Persist ``config`` to ``path`` in JSON format."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(config), f)
