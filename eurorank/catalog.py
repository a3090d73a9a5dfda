"""The catalog of entries being ranked."""

import json
from pathlib import Path

from eurorank.models import Item


class CatalogError(ValueError):
    """Raised when a catalog file cannot be read or is malformed."""
    pass


DEFAULT_CATALOG: list[Item] = [
    Item(
        name="Sweden",
        artist="Marcus & Martinus",
        song="Unforgettable",
        flag="/flags/sweden.png",
        audio_file="/songs/sweden.mp3",
    ),
    Item(
        name="Italy",
        artist="Angelina Mango",
        song="La Noia",
        flag="/flags/italy.png",
        audio_file="/songs/italy.mp3",
    ),
    Item(
        name="Finland",
        artist="Windows95man",
        song="No Rules!",
        flag="/flags/finland.png",
        audio_file="/songs/finland.mp3",
    ),
    Item(
        name="Croatia",
        artist="Baby Lasagna",
        song="Rim Tim Tagi Dim",
        flag="/flags/croatia.png",
        audio_file="/songs/croatia.mp3",
    ),
]


def load_catalog(path: str | Path) -> list[Item]:
    """Load a catalog from a JSON file.

    The file must contain a list of objects, each with at least a "name".
    Both "audio_file" and "audioFile" are accepted.

    Raises:
        CatalogError: If the file is missing, not JSON, or has bad entries
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a JSON list")

    items = []
    for position, entry in enumerate(data):
        if not isinstance(entry, dict) or not entry.get("name"):
            raise CatalogError(f"Catalog entry {position} has no name")
        items.append(Item(
            name=entry["name"],
            artist=entry.get("artist", ""),
            song=entry.get("song", ""),
            flag=entry.get("flag", ""),
            audio_file=entry.get("audio_file", entry.get("audioFile", "")),
        ))
    return items


def describe_ranking(ranking: list[int], catalog: list[Item]) -> str:
    """Render a ranking as numbered "Name - Song" lines."""
    lines = []
    for rank, index in enumerate(ranking, start=1):
        item = catalog[index]
        if item.song:
            lines.append(f"{rank}. {item.name} - {item.song}")
        else:
            lines.append(f"{rank}. {item.name}")
    return "\n".join(lines)
