"""JSON snapshot persistence.

The storefront reads the snapshot straight off disk, so every write replaces
the whole file through a temp file in the same directory. A reader sees
either the previous snapshot or the new one, never a half-written document.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pauta_scrape.logging_config import get_logger
from pauta_scrape.models import CatalogSnapshot, ProductRecord

__all__ = [
    "write_json_atomic",
    "save_snapshot",
    "save_partial",
    "load_snapshot",
    "load_partial",
    "snapshot_stats",
]

logger = get_logger("snapshot")

PathLike = Union[str, Path]


def write_json_atomic(path: PathLike, data: Any) -> None:
    """Serialize ``data`` as pretty-printed JSON and atomically replace ``path``."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_snapshot(snapshot: CatalogSnapshot, path: PathLike) -> None:
    """Persist the full category -> products mapping."""
    data = {
        category: [product.to_dict() for product in products]
        for category, products in snapshot.items()
    }
    write_json_atomic(path, data)
    logger.debug(f"Snapshot written: {path} ({len(data)} categories)")


def save_partial(records: Sequence[ProductRecord], path: PathLike) -> None:
    """Persist enrichment progress as a bare product array."""
    write_json_atomic(path, [record.to_dict() for record in records])
    logger.debug(f"Partial snapshot written: {path} ({len(records)} products)")


def _read_json(source: Path) -> Optional[Any]:
    """Parsed file contents, or None when the file is missing, empty or invalid."""
    if not source.exists():
        return None

    text = source.read_text(encoding="utf-8").strip()
    if not text:
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring unreadable snapshot {source}: {e}")
        return None


def load_snapshot(path: PathLike) -> Dict[str, List[Dict[str, Any]]]:
    """Load a snapshot the way the storefront consumes it.

    A missing, empty or unreadable file means "no products" and yields an
    empty mapping. Categories whose value is not a list are skipped.
    """
    data = _read_json(Path(path))
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring snapshot {path}: expected a JSON object")
        return {}

    return {
        str(category): products
        for category, products in data.items()
        if isinstance(products, list)
    }


def load_partial(path: PathLike) -> List[Dict[str, Any]]:
    """Load the partial enrichment file; anything but a JSON array yields []."""
    data = _read_json(Path(path))
    return data if isinstance(data, list) else []


def snapshot_stats(data: Dict[str, List[Any]]) -> Dict[str, Any]:
    """Per-category product counts for a loaded snapshot."""
    counts = {category: len(products) for category, products in data.items()}
    return {
        "categories": len(counts),
        "products": sum(counts.values()),
        "by_category": counts,
    }
